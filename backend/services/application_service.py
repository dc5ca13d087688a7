"""Application intake and review workflow around the fraud and risk scoring core."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4

from models.applications import (
    ApplicationDataModel,
    ApplicationDocumentModel,
    ApplicationModel,
    LocationCoordinatesModel,
    VerificationEntryModel,
)
from models.enums import MODIFIABLE_APPLICATION_STATUSES, ApplicationStatus, DocumentType
from models.exceptions import (
    ActiveApplicationExistsError,
    ApplicationAccessError,
    ApplicationStateError,
    FraudDetectedError,
    ModelNotFoundError,
)
from models.fraud import FraudCheckInput
from models.repositories import ApplicationRepository, FraudLookupRepository
from models.users import UserModel

from .fraud_detector import FraudDetector


logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    """Generate a prefixed unique identifier."""
    return "{0}_{1}".format(prefix, uuid4().hex[:16])


class ApplicationService:
    """Submit, amend and review welfare applications.

    Every mutation is written through `ApplicationRepository.save`, which
    recomputes the stored risk score before the write.
    """

    def __init__(
        self,
        applications: ApplicationRepository,
        lookups: FraudLookupRepository,
        fraud_detector: Optional[FraudDetector] = None,
    ) -> None:
        self._applications = applications
        self._lookups = lookups
        self._fraud_detector = fraud_detector or FraudDetector(lookups)

    async def submit_application(
        self,
        user: UserModel,
        application_data: Union[ApplicationDataModel, Dict[str, Any]],
        documents: Optional[List[Union[ApplicationDocumentModel, Dict[str, Any]]]] = None,
        location_coordinates: Optional[Dict[str, Any]] = None,
    ) -> ApplicationModel:
        """Run intake checks and persist a new pending application.

        Raises:
            ActiveApplicationExistsError: If the user already has an active application.
            FraudDetectedError: If fraud detection flags the submission.
        """
        data = ApplicationDataModel.model_validate(application_data)
        parsed_documents = [ApplicationDocumentModel.model_validate(item) for item in documents or []]

        existing = await self._applications.find_active_by_user(user.user_id)
        if existing is not None:
            logger.info(
                "Submission refused; active application exists user_id=%s application_id=%s",
                user.user_id,
                existing.application_id,
            )
            raise ActiveApplicationExistsError(existing.application_id)

        # Fraud checks run whenever a documents list is supplied, even an empty one.
        if documents is not None:
            check_input = FraudCheckInput.from_submission(
                aadhaar=user.aadhaar_number,
                application_data=data,
                documents=[document.model_dump(mode="json") for document in parsed_documents],
            )
            verdict = await self._fraud_detector.detect_fraud(check_input)
            if verdict.is_fraud:
                logger.warning(
                    "Submission rejected by fraud detection user_id=%s reasons=%s",
                    user.user_id,
                    verdict.reasons,
                )
                raise FraudDetectedError(verdict.reasons)

        application = ApplicationModel(
            application_id=_new_id("app"),
            user_id=user.user_id,
            status=ApplicationStatus.PENDING,
            application_data=data,
            documents=parsed_documents,
            location_coordinates=(
                LocationCoordinatesModel.model_validate(location_coordinates) if location_coordinates else None
            ),
        )
        saved = await self._applications.save(application)
        logger.info(
            "Application submitted application_id=%s user_id=%s risk_score=%d",
            saved.application_id,
            saved.user_id,
            saved.risk_score,
        )
        return saved

    async def upload_document(
        self,
        user_id: str,
        application_id: str,
        doc_type: Union[DocumentType, str],
        file_url: str,
    ) -> ApplicationModel:
        """Attach or replace one of the owner's documents; replacements need re-verification.

        Raises:
            ModelNotFoundError: If the application does not exist.
            ApplicationAccessError: If `user_id` does not own the application.
            ApplicationStateError: If the application is approved or rejected.
        """
        application = await self._applications.get_by_id(application_id)
        if application.user_id != user_id:
            raise ApplicationAccessError("Application not found")
        if application.status not in MODIFIABLE_APPLICATION_STATUSES:
            raise ApplicationStateError("Application cannot be modified")

        doc_type = DocumentType(doc_type)
        existing = application.find_document(doc_type)
        if existing is not None:
            existing.file_url = file_url
            existing.verified = False
        else:
            application.documents.append(ApplicationDocumentModel(type=doc_type, file_url=file_url))

        return await self._applications.save(application)

    async def verify_document(
        self,
        application_id: str,
        doc_type: Union[DocumentType, str],
        verified: bool,
        notes: Optional[str] = None,
    ) -> ApplicationModel:
        """Record an administrator's verdict on one document."""
        application = await self._applications.get_by_id(application_id)
        document = application.find_document(DocumentType(doc_type))
        if document is None:
            raise ModelNotFoundError(
                "Document {0} not found on application {1}".format(DocumentType(doc_type).value, application_id)
            )
        document.verified = verified
        document.verification_notes = notes
        return await self._applications.save(application)

    async def update_status(
        self,
        application_id: str,
        status: Union[ApplicationStatus, str],
        notes: str,
        admin_id: Optional[str] = None,
    ) -> ApplicationModel:
        """Move the application to `status` and append the transition to its history."""
        application = await self._applications.get_by_id(application_id)
        new_status = ApplicationStatus(status)
        application.status = new_status
        application.verification_history.append(
            VerificationEntryModel(status=new_status, notes=notes, verified_by=admin_id)
        )
        saved = await self._applications.save(application)
        logger.info(
            "Application status updated application_id=%s status=%s risk_score=%d",
            application_id,
            new_status.value,
            saved.risk_score,
        )
        return saved

    async def get_status_by_aadhaar(self, aadhaar: str) -> Dict[str, Any]:
        """Summarise the latest application of the Aadhaar holder.

        Raises:
            ModelNotFoundError: If the user is unknown or has never applied.
        """
        user = await self._lookups.find_user_by_aadhaar(aadhaar)
        applications = await self._applications.list_by_user(user.user_id) if user is not None else []
        if not applications:
            raise ModelNotFoundError("No applications found for this Aadhaar number")

        latest = applications[0]
        return {
            "application_id": latest.application_id,
            "status": latest.status.value,
            "submission_date": latest.submission_date.isoformat(),
            "last_updated": latest.last_updated.isoformat(),
        }

    async def verification_queue(
        self,
        district: Optional[str] = None,
        block: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ApplicationModel]:
        """Return pending applications for review, riskiest first, oldest first within a score."""
        pending = await self._applications.list_by_status(ApplicationStatus.PENDING, district=district, block=block)
        pending.sort(key=lambda item: (-item.risk_score, item.submission_date))
        if limit is not None:
            return pending[:limit]
        return pending
