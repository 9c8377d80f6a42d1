# -*- coding: utf-8 -*-
"""
resources.py

Static support resources and emergency numbers.

- ResourceProvider.resources_for(incident_type): ordered list of help
  resources shown to the user (hotlines, policies, portals)
- EmergencyNumbers: the four numbers quoted in the emergency protocol,
  loaded once from core.config and never modified afterwards
"""

from dataclasses import asdict, dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from core import config
from core.logging import logger

from .session_state import IncidentType


DEFAULT_RESOURCES: Dict[IncidentType, Tuple[str, ...]] = {
    IncidentType.HUMAN: (
        "Employee Assistance Program: https://company.com/eap",
        "HR Confidential Hotline: +41 XX XXX XX XX",
        "Mental Health Resources: https://company.com/mental-health",
        "Anti-Harassment Policy: https://company.com/policies/harassment",
        "Workplace Mediation Services: https://company.com/mediation",
    ),
    IncidentType.FACILITY: (
        "Maintenance Request Portal: https://company.com/maintenance",
        "Facilities Hotline: +41 XX XXX XX XX",
        "Safety Guidelines: https://company.com/safety",
    ),
    IncidentType.EMERGENCY: (
        "Swiss Police: 117",
        "Swiss Ambulance: 144",
        "Swiss Fire Department: 118",
        "Company Samaritans: 143",
        "Internal Security: +41 XX XXX XX XX",
    ),
}


class ResourceProvider:
    """Read-only lookup of resources per incident type."""

    def __init__(self, table: Optional[Mapping[IncidentType, Sequence[str]]] = None):
        source = table if table is not None else DEFAULT_RESOURCES
        self._table: Dict[IncidentType, Tuple[str, ...]] = {
            incident_type: tuple(items) for incident_type, items in source.items()
        }

    def resources_for(self, incident_type: IncidentType) -> List[str]:
        logger.debug(f"Retrieving resources for incident type: {incident_type.value}")
        return list(self._table.get(incident_type, ()))


@dataclass(frozen=True)
class EmergencyNumbers:
    police: str
    ambulance: str
    fire: str
    samaritan: str

    @classmethod
    def from_config(cls) -> "EmergencyNumbers":
        return cls(
            police=config.EMERGENCY_PHONE_POLICE,
            ambulance=config.EMERGENCY_PHONE_AMBULANCE,
            fire=config.EMERGENCY_PHONE_FIRE,
            samaritan=config.EMERGENCY_PHONE_SAMARITAN,
        )

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)
