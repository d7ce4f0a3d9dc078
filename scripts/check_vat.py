#!/usr/bin/env python3
"""
Check one or more VAT numbers against VIES from the command line.
Prints one JSON line per number, same shape as GET /api/vies-check.

Usage:
    python scripts/check_vat.py FR40303265045
    python scripts/check_vat.py "BE 0404.616.494" DE811115368 --requester BE0404616494 --debug
Exit code: 0 if every number is valid, 1 if any is invalid, 2 on errors.
"""
import argparse
import dataclasses
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Load .env file if present (before any imports that need env vars)
from vies_proxy.utils.env import load_env_if_present
load_env_if_present()

from vies_proxy.connectors.vies.exceptions import ViesError
from vies_proxy.core.config import settings
from vies_proxy.core.logging import setup_logging
from vies_proxy.services.vat_lookup import LookupConfig, VatLookupService


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate EU VAT numbers via VIES")
    parser.add_argument("vat", nargs="+", help="VAT number(s), e.g. FR40303265045")
    parser.add_argument("--requester", default=None, help="Requester VAT for the approximate check")
    parser.add_argument("--timeout-ms", type=int, default=None, help="Override FETCH_TIMEOUT_MS")
    parser.add_argument("--debug", action="store_true", help="Log SOAP traffic")
    args = parser.parse_args()

    setup_logging("DEBUG" if args.debug else settings.log_level)

    config = LookupConfig.from_settings(settings)
    if args.timeout_ms:
        config = dataclasses.replace(config, timeout_seconds=args.timeout_ms / 1000)
    service = VatLookupService(config)

    exit_code = 0
    for raw in args.vat:
        try:
            result = service.lookup(raw, args.requester, debug=args.debug)
        except ViesError as e:
            print(json.dumps({"ok": False, "vat": raw, "error": str(e), "kind": e.kind.value}), flush=True)
            exit_code = 2
            continue
        print(json.dumps({"ok": True, **result.to_dict()}, ensure_ascii=False), flush=True)
        if not result.valid and exit_code == 0:
            exit_code = 1
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
