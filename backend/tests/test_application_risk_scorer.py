"""Unit tests for the persisted application risk score."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys
import unittest


_BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(_BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(_BACKEND_DIR))

from common.scoring_config import RiskScoringConfig
from models.applications import (
    ApplicationDataModel,
    ApplicationDocumentModel,
    ApplicationModel,
    VerificationEntryModel,
)
from models.enums import ApplicationStatus, DocumentType
from services.application_risk_scorer import ApplicationRiskScorer, compute_risk_score


def _application(
    monthly_income: float = 8000,
    unverified: int = 0,
    verified: int = 0,
    rejections: int = 0,
) -> ApplicationModel:
    document_types = list(DocumentType)
    documents = []
    for index in range(unverified + verified):
        documents.append(
            ApplicationDocumentModel(
                type=document_types[index % len(document_types)],
                file_url="https://files.example/doc_{0}.png".format(index),
                verified=index >= unverified,
            )
        )
    history = [VerificationEntryModel(status=ApplicationStatus.REJECTED, notes="mismatch") for _ in range(rejections)]
    return ApplicationModel(
        application_id="app_1",
        user_id="usr_1",
        application_data=ApplicationDataModel(
            full_name="Suresh Oraon",
            age=34,
            district="Ranchi",
            block="Kanke",
            panchayat="Pithoria",
            village="Bodeya",
            monthly_income=monthly_income,
            bank_account="123456789012",
            ifsc_code="sbin0001234",
            bank_name="State Bank of India",
        ),
        documents=documents,
        verification_history=history,
    )


class ComputeRiskScoreTests(unittest.TestCase):
    """Validate additive weights and clamping."""

    def setUp(self) -> None:
        self.scorer = ApplicationRiskScorer()

    def test_clean_application_scores_zero(self) -> None:
        self.assertEqual(self.scorer.compute_risk_score(_application()), 0)

    def test_income_above_threshold_adds_twenty(self) -> None:
        self.assertEqual(self.scorer.compute_risk_score(_application(monthly_income=10001)), 20)
        self.assertEqual(self.scorer.compute_risk_score(_application(monthly_income=10000)), 0)

    def test_each_rejection_adds_ten(self) -> None:
        self.assertEqual(self.scorer.compute_risk_score(_application(rejections=3)), 30)

    def test_non_rejected_history_is_ignored(self) -> None:
        application = _application()
        application.verification_history.append(VerificationEntryModel(status=ApplicationStatus.UNDER_REVIEW))
        application.verification_history.append(VerificationEntryModel(status=ApplicationStatus.APPROVED))
        self.assertEqual(self.scorer.compute_risk_score(application), 0)

    def test_each_unverified_document_adds_fifteen(self) -> None:
        self.assertEqual(self.scorer.compute_risk_score(_application(unverified=2, verified=2)), 30)

    def test_combined_signals(self) -> None:
        application = _application(monthly_income=15000, unverified=1, rejections=2)
        self.assertEqual(self.scorer.compute_risk_score(application), 20 + 20 + 15)

    def test_score_is_clamped_to_100(self) -> None:
        application = _application(monthly_income=50000, unverified=4, rejections=5)
        self.assertEqual(self.scorer.compute_risk_score(application), 100)

    def test_score_is_deterministic(self) -> None:
        application = _application(monthly_income=12000, unverified=2, rejections=1)
        self.assertEqual(self.scorer.compute_risk_score(application), self.scorer.compute_risk_score(application))

    def test_score_stays_in_range(self) -> None:
        for income in (0, 9999, 10001, 1000000):
            for unverified in range(0, 5):
                for rejections in range(0, 12, 3):
                    score = self.scorer.compute_risk_score(
                        _application(monthly_income=income, unverified=unverified, rejections=rejections)
                    )
                    self.assertGreaterEqual(score, 0)
                    self.assertLessEqual(score, 100)

    def test_functional_shortcut_uses_custom_weights(self) -> None:
        config = RiskScoringConfig(income_threshold=5000, income_points=50)
        self.assertEqual(compute_risk_score(_application(monthly_income=8000), config), 50)


class MonotonicityTests(unittest.TestCase):
    """More rejections never lower the score; verifying documents never raises it."""

    def setUp(self) -> None:
        self.scorer = ApplicationRiskScorer()

    def test_adding_rejection_never_decreases_score(self) -> None:
        for rejections in range(0, 12):
            before = self.scorer.compute_risk_score(_application(unverified=2, rejections=rejections))
            after = self.scorer.compute_risk_score(_application(unverified=2, rejections=rejections + 1))
            self.assertGreaterEqual(after, before)

    def test_verifying_document_never_increases_score(self) -> None:
        application = _application(monthly_income=12000, unverified=4, rejections=1)
        previous = self.scorer.compute_risk_score(application)
        for document in application.documents:
            document.verified = True
            current = self.scorer.compute_risk_score(application)
            self.assertLessEqual(current, previous)
            previous = current
        self.assertEqual(previous, 30)


class BeforeSaveTests(unittest.TestCase):
    """Validate the persistence hook."""

    def test_before_save_overwrites_manual_score(self) -> None:
        application = _application(unverified=1)
        application.risk_score = 99
        ApplicationRiskScorer().before_save(application)
        self.assertEqual(application.risk_score, 15)

    def test_before_save_touches_last_updated(self) -> None:
        application = _application()
        stale = datetime.now(timezone.utc) - timedelta(days=3)
        application.last_updated = stale
        application.updated_at = stale
        returned = ApplicationRiskScorer().before_save(application)
        self.assertIs(returned, application)
        self.assertGreater(application.last_updated, stale)
        self.assertEqual(application.updated_at, application.last_updated)


if __name__ == "__main__":
    unittest.main()
