from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from hf.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol
    environ: Mapping[str, str]
    cwd: Path


def build_context() -> CLIContext:
    # The one place process state is read; everything below takes it explicitly.
    return CLIContext(
        console=RichConsole(),
        environ=dict(os.environ),
        cwd=Path.cwd(),
    )
