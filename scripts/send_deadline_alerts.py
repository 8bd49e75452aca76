"""
Run the deadline notifier once from the command line (cron or by hand).

    python -m scripts.send_deadline_alerts
"""
import json
import sys

from effitrack.core.exceptions import ConfigurationError
from effitrack.core.logging import setup_logging
from effitrack.database import SessionLocal, init_db
from effitrack.services.deadline_alerts import DeadlineAlertService
from effitrack.services.mail_service import ResendMailTransport


def main() -> int:
    setup_logging()
    try:
        transport = ResendMailTransport.from_settings()
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    init_db()
    with SessionLocal() as db:
        summary = DeadlineAlertService(db, transport).run()

    print(json.dumps(summary.model_dump(), indent=2))
    return 0 if summary.success else 1


if __name__ == "__main__":
    sys.exit(main())
