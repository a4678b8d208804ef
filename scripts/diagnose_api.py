#!/usr/bin/env python3
"""
API diagnostics script for PatientBMI.

Checks connectivity of the configured patient/assessment service.

Usage:
    python scripts/diagnose_api.py
    python scripts/diagnose_api.py --base-url http://192.168.1.10:8000/api/
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from patientbmi.api.client import AssessmentClient
from patientbmi.core.config import get_settings
from patientbmi.core.exceptions import ApiError, ConfigurationError


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def check_service(base_url: str | None) -> dict:
    """Check the patient/assessment service."""
    result = {
        "name": "Assessment service",
        "status": "unknown",
        "message": "",
        "endpoints_tested": [],
    }

    try:
        with AssessmentClient(base_url=base_url) as client:
            result["base_url"] = client.base_url
            result["endpoints_tested"].append(client.endpoints["patient_listing"])
            patients = client.get_patient_listing()
            result["status"] = "ok"
            result["message"] = f"Connected successfully ({len(patients)} patients listed)"
    except ConfigurationError as e:
        result["status"] = "error"
        result["message"] = f"Configuration error: {e}"
    except ApiError as e:
        result["status"] = "error"
        result["message"] = e.user_message
        if e.status_code is not None:
            result["status_code"] = e.status_code

    return result


def main() -> int:
    """Run diagnostics."""
    parser = argparse.ArgumentParser(description="Check PatientBMI service connectivity")
    parser.add_argument("--base-url", type=str, default=None, help="Override the service base URL")
    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("PATIENTBMI - API DIAGNOSTICS")
    print("=" * 60 + "\n")

    result = check_service(args.base_url)
    ok = result["status"] == "ok"

    print(f"{'✅' if ok else '❌'} {result['name']}")
    print(f"   URL: {result.get('base_url', args.base_url or get_settings().api_base_url)}")
    print(f"   Status: {result['status']}")
    if "status_code" in result:
        print(f"   HTTP: {result['status_code']}")
    print(f"   Message: {result['message']}")
    if result["endpoints_tested"]:
        print(f"   Endpoints: {', '.join(result['endpoints_tested'])}")
    print()

    print("-" * 60)
    if ok:
        print("✅ Service is operational")
    else:
        print("⚠️  Service has issues. Check configuration.")
        print()
        print("Environment variables:")
        print("  PATIENTBMI_API_BASE_URL")
        print("  PATIENTBMI_CONNECT_TIMEOUT / PATIENTBMI_READ_TIMEOUT")
    print("=" * 60 + "\n")

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
