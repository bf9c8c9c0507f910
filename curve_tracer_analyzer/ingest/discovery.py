from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional
import glob
import logging


logger = logging.getLogger(__name__)


def resolve_input_paths(paths: Iterable[str | Path]) -> List[Path]:
    """
    Turn user-supplied file arguments into a list of paths.

    - '~' is expanded.
    - Arguments containing glob characters are expanded (sorted); a pattern that
      matches nothing is kept as-is so the reader reports it as not found.
    - Order of the arguments is preserved and duplicates are dropped.
    """
    out: List[Path] = []
    seen = set()
    for raw in paths:
        s = str(raw).strip()
        if not s:
            continue
        s = str(Path(s).expanduser())
        if glob.has_magic(s):
            matches = sorted(glob.glob(s))
            if not matches:
                logger.warning("pattern matched no files: %s", s)
                matches = [s]
        else:
            matches = [s]
        for m in matches:
            p = Path(m)
            key = str(p.resolve()) if p.exists() else str(p)
            if key in seen:
                continue
            seen.add(key)
            out.append(p)
    return out


def select_files_interactively(title: str = "Select curve tracer files") -> Optional[List[Path]]:
    """
    Ask for one or more input files with a Tk file dialog.

    Returns None when the dialog cannot be shown (headless environment) or the
    user cancels.
    """
    try:
        import tkinter as tk
        from tkinter import filedialog

        root = tk.Tk()
        root.withdraw()
        root.attributes("-topmost", True)
        picked = filedialog.askopenfilenames(
            title=title,
            filetypes=[("Curve files", "CURVE.* *.C*"), ("All files", "*.*")],
        )
        root.destroy()
    except Exception as e:
        logger.warning("file dialog unavailable: %s", e)
        return None
    if not picked:
        return None
    return [Path(p) for p in picked]
