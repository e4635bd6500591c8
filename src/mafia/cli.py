# Copyright (c) 2025 The mafia authors
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
MAFIA Command Line Interface.

This module provides the main CLI interface for MAFIA, a tool that obtains
temporary AWS session credentials where MFA authentication codes are required.

Usage:
    mafia token-code           Print the credentials as shell exports and a
                               credentials file section
    mafia token-code --save    Save them to the default-session section of
                               ~/.aws/credentials
    mafia help                 Show usage
"""

import typer
from typer.core import TyperCommand

from mafia.commands import mafia


class MafiaCommand(TyperCommand):
    """Root command whose usage line reads `mafia token-code [flags]`."""

    def collect_usage_pieces(self, ctx):
        arguments = [
            param.metavar or param.name.upper()
            for param in self.get_params(ctx)
            if param.param_type_name == "argument"
        ]
        return arguments + [self.options_metavar]


app = typer.Typer(add_completion=False)


# A single registered command runs as the root command
app.command(
    name="mafia",
    cls=MafiaCommand,
    options_metavar="[flags]",
)(mafia)


if __name__ == "__main__":
    app()
