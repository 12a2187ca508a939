# src/calculators/well_engine/models.py
from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from typing import Optional, Dict, Any

THOUSAND_SEPARATORS = ('none', 'space', '.', ',')


class FluidType(Enum):
    """Fluid types in the well column."""
    GAS = 'Gas'
    OIL = 'Oil'
    WATER = 'Water'


@dataclass(frozen=True)
class SurveyStation:
    """A single directional survey station."""
    md: float   # Measured depth (m)
    inc: float  # Inclination (degrees)
    azi: float  # Azimuth (degrees)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SurveyStation':
        return cls(md=float(data.get('md', 0.0)),
                   inc=float(data.get('inc', 0.0)),
                   azi=float(data.get('azi', 0.0)))


@dataclass(frozen=True)
class TrajectoryPoint:
    """Position of one station computed by minimum curvature."""
    md: float
    tvd: float
    north: float
    east: float
    x: float  # east
    y: float  # -tvd
    z: float  # -north

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class CasingUnits:
    depth: str = 'm'
    od: str = 'cm'
    id: str = 'cm'
    weight: str = 'kg/m'

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'CasingUnits':
        data = data or {}
        return cls(depth=data.get('depth', 'm'),
                   od=data.get('od', 'cm'),
                   id=data.get('id', 'cm'),
                   weight=data.get('weight', 'kg/m'))


@dataclass(frozen=True)
class CasingSection:
    """One casing/liner section of the well architecture."""
    start: float = 0.0
    end: float = 0.0
    od: float = 0.0
    weight: float = 0.0
    id: float = 0.0
    fric_rod_rih: float = 1.0
    fric_rod_pooh: float = 1.0
    fric_tool_rih: float = 0.3
    fric_tool_pooh: float = 0.3
    units: CasingUnits = field(default_factory=CasingUnits)

    def validate(self) -> Optional[str]:
        """Return an error message, or None if the section is consistent."""
        if self.start >= self.end:
            return f"Section start ({self.start}) must be above end ({self.end})"
        if self.id and self.od and self.id >= self.od:
            return f"Inner diameter ({self.id}) must be smaller than OD ({self.od})"
        return None

    def with_changes(self, **changes) -> 'CasingSection':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start,
            'end': self.end,
            'od': self.od,
            'weight': self.weight,
            'id': self.id,
            'fricRodRIH': self.fric_rod_rih,
            'fricRodPOOH': self.fric_rod_pooh,
            'fricToolRIH': self.fric_tool_rih,
            'fricToolPOOH': self.fric_tool_pooh,
            'units': self.units.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CasingSection':
        return cls(
            start=_to_float(data.get('start')),
            end=_to_float(data.get('end')),
            od=_to_float(data.get('od')),
            weight=_to_float(data.get('weight')),
            id=_to_float(data.get('id')),
            fric_rod_rih=_to_float(data.get('fricRodRIH'), 1.0),
            fric_rod_pooh=_to_float(data.get('fricRodPOOH'), 1.0),
            fric_tool_rih=_to_float(data.get('fricToolRIH'), 0.3),
            fric_tool_pooh=_to_float(data.get('fricToolPOOH'), 0.3),
            units=CasingUnits.from_dict(data.get('units'))
        )


@dataclass(frozen=True)
class FluidLayer:
    """A fluid band; percent is its share of the total TVD column."""
    type: FluidType
    sg: float       # specific gravity
    percent: float  # 0-100

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type.value, 'sg': self.sg, 'percent': self.percent}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FluidLayer':
        return cls(type=FluidType(data.get('type', 'Water')),
                   sg=_to_float(data.get('sg')),
                   percent=_to_float(data.get('percent')))


@dataclass(frozen=True)
class SimulationSample:
    md: float
    rih: Optional[float]
    pooh: Optional[float]

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationSample':
        return cls(md=float(data['md']),
                   rih=_to_optional_float(data.get('rih')),
                   pooh=_to_optional_float(data.get('pooh')))


@dataclass
class StitchedPoint:
    """One row of the chart-ready RIH/POOH curve."""
    md: float
    rih_standard_1: Optional[float] = None
    rih_tractor: Optional[float] = None
    rih_standard_2: Optional[float] = None
    pooh: Optional[float] = None

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StitchedPoint':
        return cls(md=float(data['md']),
                   rih_standard_1=_to_optional_float(data.get('rih_standard_1')),
                   rih_tractor=_to_optional_float(data.get('rih_tractor')),
                   rih_standard_2=_to_optional_float(data.get('rih_standard_2')),
                   pooh=_to_optional_float(data.get('pooh')))


@dataclass(frozen=True)
class PressureAdjustmentState:
    enabled: bool = False
    adjusted_whp: float = 0.0  # bar

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], default_whp: float = 0.0) -> 'PressureAdjustmentState':
        if not data:
            return cls(enabled=False, adjusted_whp=default_whp)
        return cls(enabled=bool(data.get('enabled', False)),
                   adjusted_whp=_to_float(data.get('adjustedWHP')))


@dataclass(frozen=True)
class PickupWeight:
    """Rig-measured hook load at a depth."""
    md: float
    weight: float     # kg
    type: str = 'RIH'  # 'RIH' or 'POOH'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PickupWeight':
        pickup_type = str(data.get('type') or 'RIH').upper()
        if pickup_type not in ('RIH', 'POOH'):
            raise ValueError(f"Unknown pickup weight type: {pickup_type}")
        return cls(md=_to_float(data.get('md')),
                   weight=_to_float(data.get('weight')),
                   type=pickup_type)


@dataclass(frozen=True)
class TemperaturePoint:
    md: Optional[float]
    tvd: Optional[float]
    temp: Optional[float]  # degrees C

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)


@dataclass(frozen=True)
class RodProperties:
    """Rod entered for a run; unset values take the exporter defaults."""
    diameter: Optional[float] = None     # cm
    weight: Optional[float] = None       # kg/m
    youngs: Optional[float] = None       # GPa
    fluid_fric: Optional[float] = None
    rih_fric: Optional[float] = None
    pooh_fric: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RodProperties':
        data = data or {}
        return cls(diameter=_to_optional_float(data.get('diameter')),
                   weight=_to_optional_float(data.get('weight')),
                   youngs=_to_optional_float(data.get('youngs')),
                   fluid_fric=_to_optional_float(data.get('fluidFric')),
                   rih_fric=_to_optional_float(data.get('rihFric')),
                   pooh_fric=_to_optional_float(data.get('poohFric')))


@dataclass(frozen=True)
class ToolElement:
    """One element of the BHA tool string."""
    name: str = 'Tool'
    length: float = 0.0
    od: float = 0.0       # cm
    weight: float = 0.0   # kg
    is_tractor: bool = False
    tractor_force: float = 0.0
    fric_fluid: Optional[float] = None
    fric_rih: Optional[float] = None
    fric_pooh: Optional[float] = None
    is_centralizer: bool = False
    cent_max_od: float = 0.0
    cent_force: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ToolElement':
        return cls(name=data.get('name') or 'Tool',
                   length=_to_float(data.get('length')),
                   od=_to_float(data.get('od')),
                   weight=_to_float(data.get('weight')),
                   is_tractor=bool(data.get('isTractor', False)),
                   tractor_force=_to_float(data.get('tractorForce')),
                   fric_fluid=_to_optional_float(data.get('fricFluid')),
                   fric_rih=_to_optional_float(data.get('fricRIH')),
                   fric_pooh=_to_optional_float(data.get('fricPOOH')),
                   is_centralizer=bool(data.get('isCentralizer', False)),
                   cent_max_od=_to_float(data.get('centMaxOD')),
                   cent_force=_to_float(data.get('centForce')))


@dataclass(frozen=True)
class SurveyParserConfig:
    """
    Options for reading a pasted/uploaded survey table.

    start_line      : first line (1-based) holding data; values < 1 read as 1
    delimiter       : 'auto' (runs of tab/comma/semicolon/space), 'tab', ',', ';'
                      or any other literal string
    col_md/inc/azi  : 1-based column positions
    unit_multiplier : applied to MD (0.3048 reads feet into meters)
    thousand_sep    : 'none', 'space', '.' or ','
    """
    start_line: int = 1
    delimiter: str = 'auto'
    col_md: int = 1
    col_inc: int = 2
    col_azi: int = 3
    unit_multiplier: float = 1.0
    thousand_sep: str = 'none'

    def __post_init__(self):
        if self.start_line < 1:
            object.__setattr__(self, 'start_line', 1)
        if not self.delimiter:
            raise ValueError("Delimiter must not be empty")
        if self.thousand_sep not in THOUSAND_SEPARATORS:
            raise ValueError(f"Unsupported thousand separator: {self.thousand_sep!r}")
        for name in ('col_md', 'col_inc', 'col_azi'):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be a 1-based column index")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SurveyParserConfig':
        data = data or {}
        return cls(
            start_line=int(data.get('startLine', 1)),
            delimiter=data.get('delimiter', 'auto'),
            col_md=int(data.get('colMD', 1)),
            col_inc=int(data.get('colInc', 2)),
            col_azi=int(data.get('colAzi', 3)),
            unit_multiplier=float(data.get('unitMultiplier', 1.0)),
            thousand_sep=data.get('thousandSep', 'none')
        )


def _to_float(value, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_optional_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
