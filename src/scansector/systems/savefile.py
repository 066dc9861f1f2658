"""Read star systems and their objects out of a Starsector campaign save.

Starsector writes `campaign.xml` with XStream, using short aliases for its
classes. The ones read here:

- ``Sstm``  star system; the ``bN`` attribute holds its base name.
- ``Plnt``  planet (stars and moons are planets too).
- ``CCEnt`` custom campaign entity: stations, derelicts, buoys, caches...
- ``loc``   location vector, text ``"x|y"``.
- ``j0``    JSON blob; member ``f0`` is the display name.
- ``MReq``  mission requirement; its presence marks a mission item.

Objects missing any of ``loc``/``j0``/``f0`` are skipped, as are systems
without a name.
"""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Union
from xml.etree import ElementTree

from scansector.entities import CelestialObject, Position, StarSystem

_logger = logging.getLogger("scansector.savefile")

SYSTEM_TAG = "Sstm"
PLANET_TAG = "Plnt"
ENTITY_TAG = "CCEnt"
LOCATION_TAG = "loc"
JSON_TAG = "j0"
MISSION_TAG = "MReq"
NAME_ATTR = "bN"
NAME_KEY = "f0"


class SaveFileError(Exception):
    pass


@dataclass(frozen=True)
class SaveEntry:
    name: str
    path: Path
    modified: datetime


def _local(tag) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _iter_named(node: ElementTree.Element, name: str) -> Iterator[ElementTree.Element]:
    """Yield `node` and its descendants whose local tag is `name`, in document order."""
    for el in node.iter():
        if _local(el.tag) == name:
            yield el


def _first_named(node: ElementTree.Element, name: str) -> Optional[ElementTree.Element]:
    return next(_iter_named(node, name), None)


def _parse_coord(field: str) -> Optional[float]:
    # float() is laxer than the game: no padding, no digit separators
    if not field or field != field.strip() or "_" in field:
        return None
    try:
        value = float(field)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_vector(text: Optional[str]) -> Optional[Position]:
    if text is None:
        return None
    parts = text.split("|")
    if len(parts) < 2:
        return None
    x = _parse_coord(parts[0])
    y = _parse_coord(parts[1])
    if x is None or y is None:
        return None
    return Position(x, y)


def extract_object(node: ElementTree.Element) -> Optional[CelestialObject]:
    loc = _first_named(node, LOCATION_TAG)
    if loc is None:
        return None
    pos = parse_vector(loc.text)
    if pos is None:
        return None

    mission = _first_named(node, MISSION_TAG) is not None

    blob = _first_named(node, JSON_TAG)
    if blob is None or blob.text is None:
        return None
    try:
        data = json.loads(blob.text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    name = data.get(NAME_KEY)
    if not isinstance(name, str):
        return None

    return CelestialObject(name=name, pos=pos, planet=False, mission=mission)


def parse_systems(root: ElementTree.Element) -> List[StarSystem]:
    systems: List[StarSystem] = []
    for sys_node in _iter_named(root, SYSTEM_TAG):
        name = sys_node.get(NAME_ATTR)
        if name is None:
            continue
        system = StarSystem(name=name)

        for planet_node in _iter_named(sys_node, PLANET_TAG):
            obj = extract_object(planet_node)
            if obj is None:
                continue
            obj.planet = True
            system.objects.append(obj)

        for ent_node in _iter_named(sys_node, ENTITY_TAG):
            obj = extract_object(ent_node)
            if obj is None:
                continue
            system.objects.append(obj)

        systems.append(system)

    systems.sort(key=lambda s: s.name)
    return systems


def load_save(path: Union[str, Path]) -> List[StarSystem]:
    """Parse a save file and return its star systems sorted by name.

    Raises SaveFileError if the file cannot be read or is not well-formed XML.
    """
    p = Path(path)
    _logger.info("Loading save %s", p)
    try:
        tree = ElementTree.parse(str(p))
    except ElementTree.ParseError as exc:
        raise SaveFileError(f"Malformed save '{p}': {exc}") from exc
    except OSError as exc:
        raise SaveFileError(f"Cannot read save '{p}': {exc.strerror or exc}") from exc
    systems = parse_systems(tree.getroot())
    _logger.info(
        "Loaded %d systems (%d objects) from %s",
        len(systems),
        sum(len(s.objects) for s in systems),
        p,
    )
    return systems


def discover_saves(saves_dir: Optional[Union[str, Path]]) -> List[SaveEntry]:
    """List loadable saves under a Starsector `saves/` folder, newest first.

    Starsector keeps one folder per save (`save_<name>_<id>/campaign.xml`);
    loose `*.xml` files directly in the folder are listed too.
    """
    if saves_dir is None:
        return []
    root = Path(saves_dir)
    if not root.is_dir():
        return []
    found: List[SaveEntry] = []
    for p in root.iterdir():
        try:
            if p.is_dir():
                campaign = p / "campaign.xml"
                if campaign.is_file():
                    found.append(SaveEntry(p.name, campaign, datetime.fromtimestamp(campaign.stat().st_mtime)))
            elif p.is_file() and p.suffix.lower() == ".xml":
                found.append(SaveEntry(p.stem, p, datetime.fromtimestamp(p.stat().st_mtime)))
        except OSError:
            _logger.debug("Skipping unreadable save candidate %s", p)
    found.sort(key=lambda e: (e.modified, e.name), reverse=True)
    return found


def find_system(systems: List[StarSystem], name: str) -> Optional[StarSystem]:
    """Exact name match first, then case-insensitive."""
    for s in systems:
        if s.name == name:
            return s
    lowered = name.lower()
    for s in systems:
        if s.name.lower() == lowered:
            return s
    return None


def filter_systems(systems: List[StarSystem], text: str) -> List[int]:
    """Indices (into `systems`) of systems whose name contains `text`, ignoring case."""
    needle = text.lower()
    return [i for i, s in enumerate(systems) if needle in s.name.lower()]


def summarize(systems: List[StarSystem]) -> str:
    lines: List[str] = []
    for s in systems:
        missions = len(s.mission_objects)
        lines.append(f"{s.name}: {len(s.objects)} objects, {missions} mission")
        for o in s.objects:
            kind = "planet" if o.planet else "entity"
            flag = " [mission]" if o.mission else ""
            lines.append(f"  {o.name} ({kind}) at {o.pos.x:.0f}, {o.pos.y:.0f}{flag}")
    return "\n".join(lines)
