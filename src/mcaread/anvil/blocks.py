"""Block identities resolved from section palettes.

A palette entry is a compound tag::

    {Name: "minecraft:oak_stairs", Properties: {facing: "east", half: "top"}}

``Name`` is always namespaced in palettes; ``Properties`` is optional.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import nbtlib

from ..config import AIR_BLOCK
from ..errors import BlockNameError, WrongTagError


Coords = Tuple[int, int, int]


def split_name(name: str) -> Tuple[str, str]:
    """Split ``namespace:id`` on the first colon.

    Raises:
        BlockNameError: If there is no colon or either half is empty
    """
    namespace, sep, block_id = name.partition(":")
    if not sep:
        raise BlockNameError(f"Block name has no namespace: {name!r}")
    if not namespace or not block_id:
        raise BlockNameError(f"Block name has an empty namespace or id: {name!r}")
    return namespace, block_id


@dataclass(frozen=True)
class Block:
    """An immutable block identity.

    Attributes:
        namespace: Namespace such as ``minecraft`` or a mod id
        id: Block id within the namespace
        coords: World coordinates the block was read at, if any
        properties: Block-state properties as ordered (name, value) pairs
        biome: Biome name at the block's position, if resolved
    """
    namespace: str
    id: str
    coords: Optional[Coords] = None
    properties: Tuple[Tuple[str, str], ...] = ()
    biome: Optional[str] = None

    def __post_init__(self):
        if not self.namespace or not self.id:
            raise BlockNameError(f"Block needs a namespace and an id: {self.namespace!r}, {self.id!r}")

    @property
    def name(self) -> str:
        """Full ``namespace:id`` name."""
        return f"{self.namespace}:{self.id}"

    def __str__(self) -> str:
        return self.name

    def properties_dict(self) -> Dict[str, str]:
        return dict(self.properties)

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for name, value in self.properties:
            if name == key:
                return value
        return default

    @classmethod
    def parse_name(cls, name: str, coords: Optional[Coords] = None,
                   properties: Tuple[Tuple[str, str], ...] = (),
                   biome: Optional[str] = None) -> "Block":
        """Build a block from a namespaced name, rejecting bare names."""
        namespace, block_id = split_name(name)
        return cls(namespace, block_id, coords, properties, biome)

    @classmethod
    def from_name(cls, name: str, coords: Optional[Coords] = None,
                  properties: Tuple[Tuple[str, str], ...] = (),
                  biome: Optional[str] = None) -> "Block":
        """Build a block from a name, accepting a bare word.

        ``"stone"`` becomes namespace ``stone`` with id ``stone``. Use
        ``parse_name`` for names read from chunk data.
        """
        namespace, sep, block_id = name.partition(":")
        if not sep:
            block_id = namespace
        return cls(namespace, block_id, coords, properties, biome)

    @classmethod
    def from_palette(cls, tag, coords: Optional[Coords] = None,
                     biome: Optional[str] = None, strict: bool = True) -> "Block":
        """Build a block from a block-state palette entry.

        Raises:
            WrongTagError: If the entry is not a compound with a string Name
            BlockNameError: If ``strict`` and the name has no namespace
        """
        if not isinstance(tag, nbtlib.Compound):
            raise WrongTagError("palette entry", "Compound", tag)
        name = tag.get("Name")
        if not isinstance(name, nbtlib.String):
            raise WrongTagError("palette entry.Name", "String", name)

        properties: Tuple[Tuple[str, str], ...] = ()
        raw = tag.get("Properties")
        if raw is not None:
            if not isinstance(raw, nbtlib.Compound):
                raise WrongTagError("palette entry.Properties", "Compound", raw)
            pairs = []
            for key, value in raw.items():
                if not isinstance(value, nbtlib.String):
                    raise WrongTagError(f"palette entry.Properties.{key}", "String", value)
                pairs.append((str(key), str(value)))
            properties = tuple(pairs)

        parse = cls.parse_name if strict else cls.from_name
        return parse(str(name), coords, properties, biome)

    @classmethod
    def air(cls, coords: Optional[Coords] = None, biome: Optional[str] = None,
            name: str = AIR_BLOCK) -> "Block":
        """The block reported where no block-state data exists."""
        return cls.parse_name(name, coords, (), biome)
