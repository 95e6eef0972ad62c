"""
Module lookup table

Maps product numbers (unit names) to their standard unit variant numbers.
Used to enrich unit data with product information and to build a Bill of
Materials for a project.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .ebp import NOT_AVAILABLE, Unit


@dataclass(frozen=True)
class Module:
    """Known hardware module"""
    product_number: str
    standard_unit_variant_number: str
    description: str = ""


@dataclass(frozen=True)
class BomEntry:
    """Bill of Materials line"""
    product_number: str
    standard_unit_variant_number: str
    quantity: int
    serial: str
    unit_type_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_number": self.product_number,
            "standard_unit_variant_number": self.standard_unit_variant_number,
            "quantity": self.quantity,
            "serial": self.serial,
            "unit_type_id": self.unit_type_id,
        }


MODULES: Tuple[Module, ...] = (
    # connect50 v1 projects
    Module("010-02575-10_mcuv2", "100257510", "MCU v2"),
    Module("010-02223-11_mcu100", "2051011", "MCU 100"),
    Module("010-02225-10", "2110110"),
    Module("010-02225-16", "2110115"),
    Module("010-02225-17", "2110116"),
    Module("010-02225-18", "2110117"),
    Module("010-02275-01", "0152"),
    Module("010-02275-02", "0151"),
    Module("010-02225-19", "2110118"),
    Module("010-02275-03", "0152"),
    Module("010-02225-05", "2110103"),
    Module("010-02225-06", "2110104"),
    Module("010-02225-07", "2110105"),
    Module("010-02279-02", "2210102"),
    Module("010-02279-03", "2210103"),

    # connect50 v2 projects
    Module("010-02575-10", "100257510", "MCU v2"),
    Module("MFD / WDU", "88888888", "MFD / WDU"),
    Module("010-02225-30", "100222530"),
    Module("010-02225-31", "100222531"),
    Module("010-02278-21", "100227821"),
    Module("010-02279-20", "100227920"),
    Module("010-02279-21", "100227921"),

    # DCM projects
    Module("MCU v2", "100257510", "MCU v2"),
    Module("010-02219-01", "11"),
    Module("010-02219-02", "12"),
    Module("010-02219-03", "13"),
    Module("010-02219-04", "14"),
    Module("010-02219-05", "15"),
    Module("010-02219-55", "55"),
    Module("010-02220-06", "16"),
    Module("010-02220-07", "17"),
    Module("010-02220-08", "18"),
    Module("010-02220-09", "19"),
    Module("010-02220-10", "20"),
    Module("010-02221-08", "28"),
    Module("010-02222-10", "30"),
)


def _build_variant_map(modules: Iterable[Module]) -> Mapping[str, Tuple[Module, ...]]:
    variants: Dict[str, List[Module]] = {}
    for module in modules:
        variants.setdefault(module.standard_unit_variant_number, []).append(module)
    return MappingProxyType({k: tuple(v) for k, v in variants.items()})


MODULE_MAP: Mapping[str, Module] = MappingProxyType({m.product_number: m for m in MODULES})
VARIANT_MAP: Mapping[str, Tuple[Module, ...]] = _build_variant_map(MODULES)


def get_module_by_product_number(product_number: str) -> Optional[Module]:
    return MODULE_MAP.get(product_number)


def get_modules_by_variant_number(variant_number: str) -> Tuple[Module, ...]:
    return VARIANT_MAP.get(variant_number, ())


def get_unique_modules() -> List[Module]:
    """Modules deduplicated on product number + variant number, sorted by product number."""
    unique: Dict[Tuple[str, str], Module] = {}
    for module in MODULES:
        unique.setdefault((module.product_number, module.standard_unit_variant_number), module)
    return sorted(unique.values(), key=lambda m: m.product_number)


def generate_bom(units: Iterable[Unit]) -> List[BomEntry]:
    """
    Generate a Bill of Materials from decoded units.

    Units are grouped by name and variant number. Serial and unit type are
    taken from the first unit of each group.

    Args:
        units: Decoded units

    Returns:
        BOM entries sorted by product number
    """
    counts: Dict[Tuple[str, str], int] = {}
    first_seen: Dict[Tuple[str, str], Unit] = {}

    for unit in units:
        key = (unit.name, unit.standard_unit_variant_number or "")
        if key not in first_seen:
            first_seen[key] = unit
            counts[key] = 0
        counts[key] += 1

    entries = [
        BomEntry(
            product_number=unit.name,
            standard_unit_variant_number=unit.standard_unit_variant_number or NOT_AVAILABLE,
            quantity=counts[key],
            serial=unit.serial or "0",
            unit_type_id=unit.unit_type_id or NOT_AVAILABLE,
        )
        for key, unit in first_seen.items()
    ]
    return sorted(entries, key=lambda e: e.product_number)
