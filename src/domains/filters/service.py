# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Selector options shared by the master data screens.

FilterOptionsService loads the schools the user can pick from, their
branches, and the academic years and classes of the selected school.
Schools without branches get a default Main and Secondary campus.
"""

import logging
from dataclasses import dataclass, field

from src.domains.academic_year.service import AcademicYearService, AcademicYearServiceError
from src.domains.master.service import MasterDataError, MasterDataService
from src.infrastructure.api.client import ApiClient, ApiError
from src.infrastructure.api.fetcher import DataFetcher, DataSource
from src.infrastructure.fallback import datasets
from src.infrastructure.session.store import Session
from src.models.academic_year import AcademicYear
from src.models.master import Branch, School, SchoolClass

logger = logging.getLogger(__name__)


class FilterOptionsError(Exception):
    """Raised when the selector options cannot be loaded."""

    pass


@dataclass
class FilterOptions:
    """Options offered by the school, branch, year and class selectors.

    Attributes:
        schools: Selectable schools.
        branches: Branches of every listed school.
        academic_years: Years of the selected school.
        classes: Classes of the selected school.
        school_id: The selected school.
        source: FALLBACK when any part came from demo data.
    """

    schools: list[School] = field(default_factory=list)
    branches: list[Branch] = field(default_factory=list)
    academic_years: list[AcademicYear] = field(default_factory=list)
    classes: list[SchoolClass] = field(default_factory=list)
    school_id: str | None = None
    source: DataSource = DataSource.LIVE

    def branches_for(self, school_id: str) -> list[Branch]:
        return [branch for branch in self.branches if branch.school_id == school_id]

    def academic_years_for(self, school_id: str) -> list[AcademicYear]:
        return [year for year in self.academic_years if year.school_id == school_id]

    def classes_for(self, school_id: str) -> list[SchoolClass]:
        return [item for item in self.classes if item.school_id == school_id]


class FilterOptionsService:
    """Loads selector options for the session's school.

    Attributes:
        api: Backend API client.
        fetcher: Fetch helper applying demo-data fallback.
        session: Session holding the selected school.
        academic_years: Academic year service.
        master: Master data services.
    """

    def __init__(
        self,
        api: ApiClient,
        fetcher: DataFetcher,
        session: Session,
        academic_years: AcademicYearService | None = None,
        master: MasterDataService | None = None,
    ) -> None:
        self.api = api
        self.fetcher = fetcher
        self.session = session
        self.academic_years = academic_years or AcademicYearService(api, fetcher)
        self.master = master or MasterDataService(api, fetcher)

    async def _load_schools(self) -> tuple[list[School], DataSource]:
        try:
            result = await self.fetcher.fetch(
                "schools",
                lambda: self.api.get("/super-admin/schools"),
                fallback=datasets.schools,
            )
        except ApiError as e:
            raise FilterOptionsError(f"Failed to load schools: {e.message}") from e

        schools = [School.model_validate(item) for item in result.data or []]
        if not schools and self.fetcher.fallback_enabled:
            logger.warning("No schools returned, using the demo school")
            return [School.model_validate(item) for item in datasets.schools()], DataSource.FALLBACK
        return schools, result.source

    async def _load_branches(self, school: School) -> tuple[list[Branch], DataSource]:
        result = await self.master.branches.list_all(school.id)
        if result.data:
            return result.data, result.source

        logger.info("School %s has no branches, using default campuses", school.id)
        branches = [Branch.model_validate(item) for item in datasets.branches_for([school.id])]
        return branches, result.source

    async def load(self) -> FilterOptions:
        """Load all selector options.

        The selected school is the session's school, or the first listed
        school, which is then stored in the session.

        Returns:
            Loaded options.

        Raises:
            FilterOptionsError: If a backend call fails and no fallback
                applies.
        """
        schools, source = await self._load_schools()
        options = FilterOptions(schools=schools)
        sources = {source}

        try:
            for school in schools:
                branches, branch_source = await self._load_branches(school)
                options.branches.extend(branches)
                sources.add(branch_source)

            school_id = self.session.school_id
            if not school_id and schools:
                school_id = schools[0].id
                self.session.school_id = school_id
            options.school_id = school_id

            if school_id:
                years = await self.academic_years.list_academic_years(school_id)
                classes = await self.master.classes.list_all(school_id)
                options.academic_years = years.data
                options.classes = classes.data
                sources.update((years.source, classes.source))
        except (AcademicYearServiceError, MasterDataError) as e:
            raise FilterOptionsError(f"Failed to load filter options: {e}") from e

        if DataSource.FALLBACK in sources:
            options.source = DataSource.FALLBACK
        return options
