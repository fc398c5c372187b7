"""Readers for the Unity Editor's recently-used project list.

The Editor (not the Hub) remembers recently opened projects in its
per-user preferences, under keys named ``RecentlyUsedProjectPaths-<n>``:

- Windows: values of ``HKCU\\SOFTWARE\\Unity Technologies\\Unity Editor 5.x``,
  stored as NUL-terminated UTF-8 ``REG_BINARY`` with forward slashes.
- macOS: keys of ``~/Library/Preferences/com.unity3d.UnityEditor5.x.plist``.
- Linux: ``<pref>`` elements of ``~/.local/share/unity3d/prefs``, whose
  string values are base64-encoded.

Every reader returns the paths ordered by ``<n>``.
"""

from __future__ import annotations

import base64
import binascii
import plistlib
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from unitylauncher.exceptions import MalformedRecord, SourceUnavailable

RECENT_KEY_PREFIX = "RecentlyUsedProjectPaths-"
WINDOWS_EDITOR_KEY = r"SOFTWARE\Unity Technologies\Unity Editor 5.x"
MACOS_EDITOR_PLIST = Path("Library/Preferences/com.unity3d.UnityEditor5.x.plist")
LINUX_EDITOR_PREFS = Path(".local/share/unity3d/prefs")

_RECENT_KEY_RE = re.compile(re.escape(RECENT_KEY_PREFIX) + r"(\d+)")


def _recent_index(name: str) -> int | None:
    match = _RECENT_KEY_RE.match(name)
    return int(match.group(1)) if match else None


def decode_recent_value(value: bytes | str) -> str:
    """Decode one stored recent-project value into a path string.

    Raises:
        MalformedRecord: If the bytes are not UTF-8.
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedRecord(f"recent project entry is not UTF-8: {exc}") from exc
    return value.rstrip("\x00").strip()


def _ordered(entries: dict[int, str]) -> list[str]:
    return [entries[i] for i in sorted(entries) if entries[i]]


def read_windows_recent_projects(key_path: str = WINDOWS_EDITOR_KEY) -> list[str]:
    """Read recent projects from the Windows registry.

    Raises:
        SourceUnavailable: If ``winreg`` is unavailable or the key is missing.
    """
    try:
        import winreg
    except ImportError as exc:
        raise SourceUnavailable("Windows registry is not available on this platform") from exc

    try:
        key = winreg.OpenKey(winreg.HKEY_CURRENT_USER, key_path)
    except OSError as exc:
        raise SourceUnavailable(f"HKEY_CURRENT_USER\\{key_path} not found") from exc

    entries: dict[int, str] = {}
    try:
        i = 0
        while True:
            try:
                name, value, _kind = winreg.EnumValue(key, i)
            except OSError:
                break
            i += 1
            index = _recent_index(name)
            if index is None or not isinstance(value, (bytes, str)):
                continue
            try:
                entries[index] = decode_recent_value(value).replace("/", "\\")
            except MalformedRecord:
                continue
    finally:
        winreg.CloseKey(key)
    return _ordered(entries)


def read_plist_recent_projects(plist_path: Path) -> list[str]:
    """Read recent projects from the macOS Editor preferences plist.

    Raises:
        SourceUnavailable: If the plist is missing or unreadable.
        MalformedRecord: If it is not a valid plist dictionary.
    """
    try:
        with plist_path.open("rb") as fh:
            data = plistlib.load(fh)
    except FileNotFoundError as exc:
        raise SourceUnavailable(f"Unity preferences {plist_path} not found") from exc
    except OSError as exc:
        raise SourceUnavailable(f"Unity preferences {plist_path} could not be read: {exc}") from exc
    except (plistlib.InvalidFileException, ValueError) as exc:
        raise MalformedRecord(f"{plist_path}: invalid plist: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedRecord(f"{plist_path}: expected a dictionary")

    entries: dict[int, str] = {}
    for name, value in data.items():
        index = _recent_index(str(name))
        if index is None or not isinstance(value, (bytes, str)):
            continue
        try:
            entries[index] = decode_recent_value(value)
        except MalformedRecord:
            continue
    return _ordered(entries)


def read_prefs_recent_projects(prefs_path: Path) -> list[str]:
    """Read recent projects from the Linux Editor ``prefs`` XML file.

    Raises:
        SourceUnavailable: If the prefs file is missing or unreadable.
        MalformedRecord: If it is not well-formed XML.
    """
    try:
        raw = prefs_path.read_bytes()
    except FileNotFoundError as exc:
        raise SourceUnavailable(f"Unity preferences {prefs_path} not found") from exc
    except OSError as exc:
        raise SourceUnavailable(f"Unity preferences {prefs_path} could not be read: {exc}") from exc
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as exc:
        raise MalformedRecord(f"{prefs_path}: invalid XML: {exc}") from exc

    entries: dict[int, str] = {}
    for pref in root.iter("pref"):
        index = _recent_index(pref.get("name", ""))
        if index is None or not pref.text:
            continue
        try:
            value = base64.b64decode(pref.text.strip(), validate=True)
            entries[index] = decode_recent_value(value)
        except (binascii.Error, MalformedRecord):
            continue
    return _ordered(entries)
