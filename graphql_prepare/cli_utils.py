"""
CLI utilities for command line reconstruction and introspection.
"""

import click

PROGRAM_NAME = "graphql prepare"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    # Try to get current Click context for parameter values
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    cmd_parts = [PROGRAM_NAME]

    for param in click_command.params:
        if not isinstance(param, click.Option) or param.name not in cli_args:
            continue

        value = cli_args[param.name]
        # Skip unset options and defaults
        if value is None or value == () or value == param.default:
            continue

        if param.is_flag:
            if param.secondary_opts and not value:
                cmd_parts.append(param.secondary_opts[0])
            elif value:
                cmd_parts.append(param.opts[0])
            continue

        values = value if param.multiple else (value,)
        for item in values:
            cmd_parts.extend([param.opts[0], str(item)])

    return " ".join(cmd_parts)
