"""Print the configured greeting."""


def run(context):
    config = context.config["greet"]
    return f"{config['greeting']}{config['punctuation']}"
