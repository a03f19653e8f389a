"""
Eligibility Classifier
Decides whether a candidate may be proposed for a project, and why.

The rules are evaluated inside the ranking query (see vector_store.py);
classify() mirrors the same rules in Python.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from .models import EligibilityStatus


@dataclass(frozen=True)
class AllocationRecord:
    """Minimal view of a project allocation used by classify()."""

    project_id: int
    end_date: Optional[date] = None
    deleted: bool = False


class EligibilityClassifier:
    """
    Eligibility rules for one candidate against one project.

    onBench:
        - the candidate holds no open-ended allocation, or
        - the candidate is not flagged for extra work, holds no allocation
          on the target project, and rolls off within the window
          (default 7 days) after the project's start date.
    onWork:
        - the candidate is flagged for extra work and holds no allocation
          on the target project.

    Anything else is excluded. The SQL fragments expect the aliases
    ``ep`` (employee_profiles) and ``proj`` (target project CTE with a
    ``start_date`` column), plus the bind parameters ``:project_id`` and
    ``:rolloff_window_days``.
    """

    NO_OPEN_ENDED_ALLOCATION = """NOT EXISTS (
            SELECT 1
            FROM project_allocations pa
            WHERE pa.employee_id = ep.user_id
                AND pa.deleted_at IS NULL
                AND pa.end_date IS NULL
        )"""

    NOT_ON_TARGET_PROJECT = """NOT EXISTS (
            SELECT 1
            FROM project_allocations pa
            WHERE pa.employee_id = ep.user_id
                AND pa.project_id = :project_id
                AND pa.deleted_at IS NULL
        )"""

    ROLLS_OFF_BEFORE_START = (
        "ep.end_date IS NOT NULL"
        " AND ep.end_date <= proj.start_date + CAST(:rolloff_window_days AS integer)"
    )

    def __init__(self, rolloff_window_days: int = 7):
        self.rolloff_window_days = rolloff_window_days

    def bench_rolloff_sql(self) -> str:
        return (
            f"(ep.availability_flag = false AND {self.NOT_ON_TARGET_PROJECT}"
            f" AND {self.ROLLS_OFF_BEFORE_START})"
        )

    def extra_work_sql(self) -> str:
        return f"(ep.availability_flag = true AND {self.NOT_ON_TARGET_PROJECT})"

    def status_case_sql(self) -> str:
        """SQL CASE expression yielding 'onBench', 'onWork' or NULL."""
        return f"""CASE
            WHEN {self.NO_OPEN_ENDED_ALLOCATION} THEN '{EligibilityStatus.ON_BENCH.value}'
            WHEN {self.bench_rolloff_sql()} THEN '{EligibilityStatus.ON_BENCH.value}'
            WHEN {self.extra_work_sql()} THEN '{EligibilityStatus.ON_WORK.value}'
        END"""

    def where_sql(self) -> str:
        """SQL predicate that keeps exactly the candidates the CASE labels."""
        return (
            f"({self.NO_OPEN_ENDED_ALLOCATION}"
            f"\n        OR {self.bench_rolloff_sql()}"
            f"\n        OR {self.extra_work_sql()})"
        )

    def bind_params(self) -> dict[str, int]:
        return {"rolloff_window_days": self.rolloff_window_days}

    def classify(
        self,
        project_id: int,
        project_start_date: Optional[date],
        availability_flag: bool,
        candidate_end_date: Optional[date],
        allocations: Iterable[AllocationRecord],
    ) -> Optional[EligibilityStatus]:
        """
        Classify a candidate in Python with the same rules as the query.

        Args:
            project_id: Target project.
            project_start_date: Target project's start date.
            availability_flag: Candidate is open to extra work.
            candidate_end_date: Candidate's rolloff date.
            allocations: All of the candidate's allocations.

        Returns:
            EligibilityStatus, or None when the candidate is excluded.
        """
        live = [a for a in allocations if not a.deleted]
        has_open_ended = any(a.end_date is None for a in live)
        on_target_project = any(a.project_id == project_id for a in live)

        if not has_open_ended:
            return EligibilityStatus.ON_BENCH

        if (
            not availability_flag
            and not on_target_project
            and candidate_end_date is not None
            and project_start_date is not None
            and candidate_end_date <= project_start_date + timedelta(days=self.rolloff_window_days)
        ):
            return EligibilityStatus.ON_BENCH

        if availability_flag and not on_target_project:
            return EligibilityStatus.ON_WORK

        return None
