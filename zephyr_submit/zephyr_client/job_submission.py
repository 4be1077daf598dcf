"""
Job Submission Module.

Defines the automation job metadata sent to Zephyr alongside the result
artifact, in the ``automationJobDetail`` form field.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class JobSubmission:
    """
    Metadata of one create-and-execute automation job.

    Field names match the Zephyr API exactly and their declaration order is
    the order of the serialized JSON object.

    Attributes:
        releaseId: Zephyr release the cycle belongs to.
        jobName: Name of the automation job.
        automationFramework: Result format of the artifact (e.g. "JUNIT").
        cycleName: Name of the test cycle to create or reuse.
        jobDetailTcrCatalogTreeId: Test repository folder receiving the testcases.
        projectId: Zephyr project identifier.
        testRepositoryPath: Repository path for created testcases.
        cycleStartDateStr: Cycle start date, passed through unvalidated.
        cycleEndDateStr: Cycle end date, passed through unvalidated.
        isReuse: Reuse an existing cycle with the same name.
        timeStamp: Append a timestamp to the cycle/phase name.
        createPackage: Create package structure in the repository.
        assignResultsTo: User the executions are assigned to.
        phaseName: Name of the cycle phase.
    """

    releaseId: int
    jobName: str
    automationFramework: str
    cycleName: str
    jobDetailTcrCatalogTreeId: int
    projectId: int
    testRepositoryPath: str
    cycleStartDateStr: str
    cycleEndDateStr: str
    isReuse: bool
    timeStamp: bool
    createPackage: bool
    assignResultsTo: int
    phaseName: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the fields as an insertion-ordered dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_json(self, indent: Optional[int] = None) -> str:
        """
        Serialize to JSON text.

        Args:
            indent: Pretty-print indentation; compact separators when None.

        Returns:
            JSON object with the fourteen fields in declaration order.
        """
        if indent is None:
            return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]
