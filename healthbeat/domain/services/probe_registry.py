"""Domain service mapping check kinds to the probe responsible for them."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from healthbeat.domain.entities.monitoring import CheckType
from healthbeat.domain.ports.health_probe import IHealthProbe


class ProbeRegistry:
    """
    Fixed mapping from ``CheckType`` to probe instance.

    Built once at startup from the known probes and read-only afterwards.
    Unknown kinds resolve to ``None`` rather than to a default probe, so
    the dispatcher can skip them without recording a result.
    """

    def __init__(self, probes: Iterable[IHealthProbe]) -> None:
        mapping: Dict[CheckType, IHealthProbe] = {}
        for probe in probes:
            check_type = CheckType(probe.check_type)
            if check_type in mapping:
                raise ValueError(
                    f"Duplicate probe registered for check type '{check_type.value}'"
                )
            mapping[check_type] = probe
        self._probes: Mapping[CheckType, IHealthProbe] = MappingProxyType(mapping)

    def get(self, check_type: CheckType) -> Optional[IHealthProbe]:
        """Return the probe for ``check_type`` or None when unsupported."""
        return self._probes.get(check_type)

    def supported_types(self) -> List[CheckType]:
        return list(self._probes)

    def __contains__(self, check_type: object) -> bool:
        return check_type in self._probes

    def __len__(self) -> int:
        return len(self._probes)
