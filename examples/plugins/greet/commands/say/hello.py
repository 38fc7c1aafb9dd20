"""Say hello to someone."""

ALIASES = ["hi"]


def run(context):
    config = context.config["greet"]
    message = f"{config['greeting']}, {context.parameters.first or 'stranger'}{config['punctuation']}"
    if context.parameters.options.get("shout"):
        message = message.upper()
    context.print.success(message)
    return message
