"""Say something."""

ALIASES = ["s"]


def run(context):
    return context.parameters.string
