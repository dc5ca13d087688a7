"""Run submission-time fraud detection for one application payload and print the verdict."""

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys
from typing import Any, Dict, List, Optional


BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from core.config import AppSettings, load_settings
from core.logging_config import setup_logging
from models.applications import ApplicationModel
from models.fraud import FraudCheckInput
from models.users import UserModel
from repositories.document_store import MemoryDocumentStore, build_document_store
from repositories.fraud_lookup_repository import DocumentFraudLookupRepository
from services.application_risk_scorer import ApplicationRiskScorer
from services.fraud_detector import FraudDetector


logger = logging.getLogger(__name__)


def _read_json(path: str) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _seed_store(store: MemoryDocumentStore, fixture: Dict[str, Any], scorer: ApplicationRiskScorer) -> None:
    """Load users and applications from a fixture into the in-memory store."""
    for row in fixture.get("users", []):
        user = UserModel.model_validate(row)
        store.set_document("users", user.user_id, user.to_firestore())
    for row in fixture.get("applications", []):
        application = scorer.before_save(ApplicationModel.model_validate(row))
        store.set_document("applications", application.application_id, application.to_firestore())
    logger.info(
        "Seeded store users=%d applications=%d",
        len(fixture.get("users", [])),
        len(fixture.get("applications", [])),
    )


async def _run(args: argparse.Namespace, settings: AppSettings) -> Dict[str, Any]:
    if args.seed:
        store = MemoryDocumentStore()
        _seed_store(store, _read_json(args.seed), ApplicationRiskScorer(settings.risk_scoring))
        users_collection, applications_collection = "users", "applications"
    else:
        store = build_document_store(settings)
        users_collection, applications_collection = settings.users_collection, settings.applications_collection

    repository = DocumentFraudLookupRepository(
        store,
        users_collection=users_collection,
        applications_collection=applications_collection,
    )
    detector = FraudDetector(repository, settings.fraud)
    check_input = FraudCheckInput.model_validate(_read_json(args.input))
    result = await detector.detect_fraud(check_input)
    return result.model_dump()


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments, run the fraud check and print the result as JSON."""
    parser = argparse.ArgumentParser(description="Run fraud detection for one application submission.")
    parser.add_argument("input", type=str, help="JSON file with aadhaar, name, address and documents.")
    parser.add_argument("--seed", type=str, default=None, help="Optional JSON fixture of users and applications.")
    parser.add_argument("--config", type=str, default=None, help="Optional path to config.yml.")
    args = parser.parse_args(argv)

    settings = load_settings(Path(args.config) if args.config else None)
    setup_logging(settings.log_level)
    result = asyncio.run(_run(args, settings))
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
