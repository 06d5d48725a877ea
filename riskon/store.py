from __future__ import annotations
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple
import json
import logging

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class ApplicantNotFoundError(LookupError):
    def __init__(self, applicant_id: Optional[str]):
        super().__init__(f"Applicant not found: {applicant_id!r}")
        self.applicant_id = applicant_id


def load_json(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


class ApplicantStore:
    """
    Read-only applicant map (ID -> record), loaded once.
    Iteration follows the insertion order of the source document.
    """

    def __init__(self, applicants: Mapping[str, Record]):
        self._data: Mapping[str, Record] = MappingProxyType(dict(applicants))

    @classmethod
    def from_json(cls, path: Path) -> "ApplicantStore":
        store = cls(load_json(path))
        logger.info("Loaded %d applicants from %s", len(store), path)
        return store

    def get(self, applicant_id: Optional[str]) -> Record:
        if applicant_id is None or applicant_id not in self._data:
            raise ApplicantNotFoundError(applicant_id)
        return self._data[applicant_id]

    def ids(self) -> List[str]:
        return list(self._data)

    def items(self) -> Iterator[Tuple[str, Record]]:
        return iter(self._data.items())

    def __contains__(self, applicant_id: object) -> bool:
        return applicant_id in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)
