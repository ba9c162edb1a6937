from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Stage progress display with tqdm (TTY only).

An upload goes through a fixed list of stages (parse, validate, normalize,
store). On a TTY a single bar advances once per stage; in non-TTY
environments (CI, pipes) the bar is disabled to avoid ANSI control sequences
in the output.
"""

__all__ = [
    "UPLOAD_STAGES",
    "StageProgress",
    "is_tty_enabled",
]

UPLOAD_STAGES: tuple[str, ...] = ("parse", "validate", "normalize", "store")


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class StageProgress:
    """Progress over the named stages of one upload."""

    def __init__(self, file_name: str, stages: tuple[str, ...] = UPLOAD_STAGES) -> None:
        self.file_name = file_name
        self.stages = stages
        self.completed: list[str] = []
        self.current: str | None = None

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=len(stages),
                desc=f"Processing {file_name}",
                unit="stage",
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start(self, stage: str) -> None:
        self.current = stage
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(stage=stage)

    def finish(self, rows: int | None = None) -> None:
        if self.current is not None:
            self.completed.append(self.current)
            self.current = None
        if self.enabled and self.pbar is not None:
            if rows is not None:
                self.pbar.set_postfix(rows=rows)
            self.pbar.update(1)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> StageProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
