from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from effitrack.core.limiter import OPERATOR_RATE_LIMIT, limiter
from effitrack.database import get_db
from effitrack.schemas.alerts import DeadlineAlertSummary
from effitrack.services.deadline_alerts import DeadlineAlertService
from effitrack.services.mail_service import MailTransport, get_mail_transport

router = APIRouter(prefix="/alerts", tags=["Deadline Alerts"])


@router.post("/deadlines", response_model=DeadlineAlertSummary)
@limiter.limit(OPERATOR_RATE_LIMIT)
def send_deadline_alerts(
    request: Request,
    db: Session = Depends(get_db),
    transport: MailTransport = Depends(get_mail_transport),
):
    """
    Email every employee responsible for a project or task due within the
    lookahead window. Individual send failures are reported in the summary;
    only a missing mail credential fails the whole call.
    """
    return DeadlineAlertService(db, transport).run()
