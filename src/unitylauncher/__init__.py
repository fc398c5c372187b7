"""unitylauncher: Find, rank, and open local Unity projects with the right editor."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
