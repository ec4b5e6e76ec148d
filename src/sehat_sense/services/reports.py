"""Lab report upload flow."""

import logging
from dataclasses import dataclass

from sehat_sense.domain.errors import ProfileMissingError
from sehat_sense.domain.profile import UserProfile
from sehat_sense.domain.reports import ReportAnalysis
from sehat_sense.services.gateway import HealthGateway
from sehat_sense.services.store import StateStore

_logger = logging.getLogger(__name__)


@dataclass
class ReportService:
    """Extracts lab values from a report and merges them into the profile."""

    gateway: HealthGateway
    store: StateStore

    async def upload(
        self, data: bytes, mime_type: str | None = None
    ) -> tuple[ReportAnalysis, UserProfile]:
        """Analyze a report and merge metrics and conditions into the profile."""
        if self.store.profile is None:
            raise ProfileMissingError("Cannot upload a report without a profile")
        analysis = await self.gateway.analyze_report(data, mime_type)
        current = self.store.profile
        if current is None:
            raise ProfileMissingError("Profile was removed during report analysis")
        new_conditions = sorted(analysis.conditions - set(current.conditions))
        profile = self.store.update_profile(
            metrics=analysis.report_data.present(),
            conditions=(*current.conditions, *new_conditions),
        )
        _logger.info(
            "Report merged: metrics=%s new_conditions=%s",
            len(profile.metrics),
            [str(condition) for condition in new_conditions],
        )
        return analysis, profile
