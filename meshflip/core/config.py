"""Configuration objects for meshflip beautify runs and the CLI driver."""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional, Union


class BeautifyMethod(str, Enum):
    """Quality metric used to score a candidate flip."""
    AREA = 'area'
    ANGLE = 'angle'

    @classmethod
    def coerce(cls, value: Union[str, 'BeautifyMethod']) -> 'BeautifyMethod':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown beautify method '{value}' (expected one of: "
                             f"{', '.join(m.value for m in cls)})") from None


@dataclass
class BeautifyConfig:
    """Options for a single beautify invocation.

    Attributes
    ----------
    method : BeautifyMethod
        ``AREA`` compares area/perimeter ratios of the two triangle pairs in the
        plane of the quad; ``ANGLE`` compares the angle between face normals.
    restrict_tag : bool
        Only rotate edges whose two apex vertices carry different vertex tags
        (``TriMesh.vert_tags``). Used to keep flips across a selection border.
    restrict_degenerate : bool
        Area method only: do not force a rotation away from a current diagonal
        whose two triangles fold over each other or have zero area in the
        projected plane.
    """
    method: BeautifyMethod = BeautifyMethod.AREA
    restrict_tag: bool = False
    restrict_degenerate: bool = False

    def __post_init__(self):
        self.method = BeautifyMethod.coerce(self.method)
        self.restrict_tag = bool(self.restrict_tag)
        self.restrict_degenerate = bool(self.restrict_degenerate)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['method'] = self.method.value
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BeautifyConfig':
        known = {k: v for k, v in (data or {}).items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class DriverConfig:
    """Demo driver settings: which surface to build and what to write.

    The nested ``beautify`` block is passed unchanged to ``beautify_fill``.
    """
    npts: int = 200
    seed: int = 42
    amplitude: float = 0.25
    out: Optional[str] = 'beautify_run.png'
    plot: bool = True
    beautify: BeautifyConfig = field(default_factory=BeautifyConfig)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['beautify'] = self.beautify.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DriverConfig':
        data = dict(data or {})
        b = BeautifyConfig.from_dict(data.pop('beautify', {}) or {})
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(beautify=b, **known)


__all__ = ['BeautifyMethod', 'BeautifyConfig', 'DriverConfig']
