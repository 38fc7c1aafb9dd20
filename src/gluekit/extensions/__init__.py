"""Built-in extensions.

Each module exposes ``setup(context)``, which attaches one capability
to the context under the name listed in ``CORE_EXTENSIONS``.
"""
from __future__ import annotations

from gluekit.extensions import filesystem, meta, printing, strings

CORE_EXTENSIONS = [
    ("strings", strings.setup),
    ("print", printing.setup),
    ("filesystem", filesystem.setup),
    ("meta", meta.setup),
]

__all__ = ["CORE_EXTENSIONS"]
