"""Detached process launching for editors and the Unity Hub."""

from __future__ import annotations

from unitylauncher.launch.launcher import LaunchResult, ProcessLauncher, SubprocessLauncher

__all__ = ["LaunchResult", "ProcessLauncher", "SubprocessLauncher"]
