"""State shared by every CLI command through ``click``'s context object."""

from __future__ import annotations

from dataclasses import dataclass

import click

from orderdesk.infrastructure.bootstrap import Container


@dataclass
class CliContext:
    container: Container
    user_id: str


pass_cli = click.make_pass_decorator(CliContext)
