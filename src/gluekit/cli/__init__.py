"""CLI package.

The ``cli`` sub-package contains the Click application. It should
import only from the public API of the parent package and its
sub-packages, never reach into private helpers.
"""
from __future__ import annotations
