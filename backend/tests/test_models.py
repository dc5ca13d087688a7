"""Unit tests for Firestore-ready domain models."""

from datetime import datetime, timezone
from pathlib import Path
import sys
import unittest

from pydantic import ValidationError


_BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(_BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(_BACKEND_DIR))

from models.applications import ApplicationDataModel, ApplicationDocumentModel, ApplicationModel
from models.enums import ApplicationStatus, DocumentType, UserRole
from models.exceptions import (
    ActiveApplicationExistsError,
    FraudDetectedError,
    ModelError,
    ModelNotFoundError,
    ModelValidationError,
    RepositoryError,
    VersionConflictError,
)
from models.fraud import FraudCheckAddress, FraudCheckInput, FraudCheckResult
from models.users import UserModel


def _application_data(**overrides) -> dict:
    data = {
        "full_name": "Suresh Oraon",
        "age": 34,
        "district": "Ranchi",
        "block": "Kanke",
        "panchayat": "Pithoria",
        "village": "Bodeya",
        "monthly_income": 8000,
        "bank_account": "123456789012",
        "ifsc_code": "sbin0001234",
        "bank_name": "State Bank of India",
    }
    data.update(overrides)
    return data


class ModelValidationTests(unittest.TestCase):
    """Test model happy paths and business rules."""

    def test_user_model_happy_path(self) -> None:
        """Create a valid beneficiary."""
        user = UserModel(
            user_id="usr_1",
            aadhaar_number="234567890123",
            name=" Suresh Oraon ",
            phone_number="9876543210",
            address={
                "street": "Main Road",
                "district": "Ranchi",
                "block": "Kanke",
                "panchayat": "Pithoria",
                "pincode": "834006",
            },
        )
        self.assertEqual(user.name, "Suresh Oraon")
        self.assertEqual(user.role, UserRole.BENEFICIARY)
        self.assertEqual(user.address.state, "Jharkhand")

    def test_user_identifier_formats(self) -> None:
        """Reject malformed Aadhaar and phone numbers."""
        with self.assertRaises(ValidationError):
            UserModel(user_id="usr_1", aadhaar_number="12345", name="A", phone_number="9876543210")
        with self.assertRaises(ValidationError):
            UserModel(user_id="usr_1", aadhaar_number="234567890123", name="A", phone_number="98765")

    def test_application_age_bounds(self) -> None:
        """Applicants must be between 18 and 65."""
        with self.assertRaises(ValidationError):
            ApplicationDataModel(**_application_data(age=17))
        with self.assertRaises(ValidationError):
            ApplicationDataModel(**_application_data(age=66))

    def test_ifsc_is_upper_cased(self) -> None:
        self.assertEqual(ApplicationDataModel(**_application_data()).ifsc_code, "SBIN0001234")

    def test_unknown_document_type_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            ApplicationDocumentModel(type="passport", file_url="p.png")

    def test_risk_score_range(self) -> None:
        with self.assertRaises(ValidationError):
            ApplicationModel(
                application_id="app_1",
                user_id="usr_1",
                application_data=_application_data(),
                risk_score=101,
            )

    def test_application_defaults_and_lookup(self) -> None:
        application = ApplicationModel(
            application_id="app_1",
            user_id="usr_1",
            application_data=_application_data(),
            documents=[{"type": "bank_statement", "file_url": "b.pdf"}],
            verification_history=None,
        )
        self.assertEqual(application.status, ApplicationStatus.PENDING)
        self.assertEqual(application.verification_history, [])
        self.assertEqual(application.find_document(DocumentType.BANK_STATEMENT).file_url, "b.pdf")
        self.assertIsNone(application.find_document(DocumentType.AADHAAR))

    def test_firestore_roundtrip(self) -> None:
        """Serialize to plain JSON types and parse back."""
        application = ApplicationModel(
            application_id="app_1",
            user_id="usr_1",
            status=ApplicationStatus.UNDER_REVIEW,
            application_data=_application_data(),
            documents=[{"type": "aadhaar", "file_url": "a.png", "verified": True}],
            verification_history=[{"status": "under_review", "notes": "checking"}],
            submission_date=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )
        payload = application.to_firestore()
        self.assertEqual(payload["status"], "under_review")
        self.assertEqual(payload["documents"][0]["type"], "aadhaar")
        self.assertIsInstance(payload["submission_date"], str)
        self.assertNotIn("location_coordinates", payload)
        self.assertNotIn("payment_history", payload)

        restored = ApplicationModel.from_firestore(payload, doc_id="app_1")
        self.assertEqual(restored.id, "app_1")
        self.assertEqual(restored.status, ApplicationStatus.UNDER_REVIEW)
        self.assertEqual(restored.submission_date, application.submission_date)

    def test_from_firestore_wraps_errors(self) -> None:
        with self.assertRaises(ModelValidationError):
            UserModel.from_firestore({"user_id": "usr_1"})


class FraudModelTests(unittest.TestCase):
    """Test fraud check input and result models."""

    def test_input_from_submission(self) -> None:
        data = ApplicationDataModel(**_application_data())
        check_input = FraudCheckInput.from_submission("234567890123", data, documents=[{"type": "aadhaar"}])
        self.assertEqual(check_input.name, "Suresh Oraon")
        self.assertEqual(check_input.structured_address.district, "Ranchi")
        self.assertEqual(check_input.documents, [{"type": "aadhaar"}])

    def test_input_accepts_string_address(self) -> None:
        check_input = FraudCheckInput(aadhaar="234567890123", name="Suresh", address="Ranchi Kanke")
        self.assertEqual(check_input.address, "Ranchi Kanke")
        self.assertIsNone(check_input.structured_address)

    def test_input_accepts_mapping_address(self) -> None:
        check_input = FraudCheckInput.model_validate(
            {"aadhaar": "234567890123", "name": "Suresh", "address": {"district": "Pakur", "block": "Hiranpur"}}
        )
        self.assertIsInstance(check_input.address, FraudCheckAddress)
        self.assertEqual(check_input.structured_address.block, "Hiranpur")

    def test_input_keeps_additional_address_keys(self) -> None:
        check_input = FraudCheckInput.model_validate(
            {"address": {"district": "Ranchi", "street": "Temporary shelter", "landmark": "Near school"}}
        )
        dumped = check_input.address.model_dump()
        self.assertEqual(dumped["street"], "Temporary shelter")
        self.assertEqual(dumped["landmark"], "Near school")

    def test_input_coerces_scalars_and_drops_bad_shapes(self) -> None:
        check_input = FraudCheckInput.model_validate(
            {"aadhaar": 123456789010, "name": ["Ram"], "address": 42, "documents": {"type": "aadhaar"}}
        )
        self.assertEqual(check_input.aadhaar, "123456789010")
        self.assertIsNone(check_input.name)
        self.assertEqual(check_input.address, "42")
        self.assertIsNone(check_input.documents)

    def test_structured_address_part_numbers_become_text(self) -> None:
        check_input = FraudCheckInput.model_validate({"address": {"district": "Ranchi", "village": 7}})
        self.assertEqual(check_input.structured_address.village, "7")

    def test_result_message(self) -> None:
        clean = FraudCheckResult.from_checks(is_fraud=False, reasons=[], risk_score=10)
        self.assertEqual(clean.message, "No fraud detected")
        flagged = FraudCheckResult.from_checks(is_fraud=True, reasons=["a", "b"], risk_score=90)
        self.assertEqual(flagged.message, "Fraud detected: a, b")

    def test_internal_error_result(self) -> None:
        result = FraudCheckResult.internal_error(50)
        self.assertFalse(result.is_fraud)
        self.assertEqual(result.risk_score, 50)
        self.assertEqual(result.reasons, ["Internal verification error"])
        self.assertEqual(result.message, "Error during fraud detection")


class ExceptionTests(unittest.TestCase):
    """Ensure error types carry their context."""

    def test_repository_error_types_importable(self) -> None:
        self.assertTrue(issubclass(ModelNotFoundError, ModelError))
        self.assertTrue(issubclass(VersionConflictError, ModelError))
        self.assertTrue(issubclass(RepositoryError, ModelError))

    def test_workflow_errors_carry_details(self) -> None:
        self.assertEqual(ActiveApplicationExistsError("app_1").application_id, "app_1")
        self.assertEqual(FraudDetectedError(["Ghost applicant pattern detected"]).reasons, ["Ghost applicant pattern detected"])


if __name__ == "__main__":
    unittest.main()
