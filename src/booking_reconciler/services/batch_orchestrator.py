"""
Batch orchestration for booking reconciliation.

One token is acquired up front, then every record runs retrieval and
reconciliation in its own task. Each task converts its own failure into an
error entry, so one bad record never affects the others.
"""

import asyncio
from typing import Any, Callable, Dict, List, Sequence

import structlog
from pydantic import ValidationError

from ..config import config
from ..interfaces.reservation_api import ReservationAPIInterface
from ..types import (
    BatchInputError,
    BatchOutcome,
    ExpectedRecord,
    InputMode,
    LiveBooking,
    RecordOutcome,
    RecordValidationError,
)
from ..utils.validators import normalize_pnr, validate_pnr
from .identity_retriever import IdentityFallbackRetriever
from .reconciler import Reconciler
from .results_log import ResultsLog
from .token_acquirer import TokenAcquirer


logger = structlog.get_logger(__name__)


def adapt_reference(raw: Any, row_number: int) -> ExpectedRecord:
    """Bare booking reference from a submitted list"""
    if raw is not None and not isinstance(raw, (str, int)):
        raise RecordValidationError(f"Unsupported booking reference: {raw!r}")
    return ExpectedRecord(pnr=normalize_pnr(raw), row_number=row_number)


def adapt_spreadsheet_row(raw: Any, row_number: int) -> ExpectedRecord:
    """Spreadsheet row keyed by PNR, Flight, Pur, Dep, Arr, TravelDate"""
    if not isinstance(raw, dict):
        raise RecordValidationError(f"Unsupported spreadsheet row: {raw!r}")
    data = dict(raw)
    data["PNR"] = normalize_pnr(data.get("PNR"))
    try:
        return ExpectedRecord.model_validate({**data, "row_number": row_number})
    except ValidationError as e:
        raise RecordValidationError(f"Invalid spreadsheet row: {e}") from e


INPUT_ADAPTERS: Dict[InputMode, Callable[[Any, int], ExpectedRecord]] = {
    InputMode.REFERENCE_LIST: adapt_reference,
    InputMode.SPREADSHEET: adapt_spreadsheet_row,
}


def describe_error(label: str, error: Exception) -> str:
    """Per-record error message keyed by PNR"""
    if isinstance(error, RecordValidationError):
        return f"Error processing PNR {label}: {error}"

    status_code = getattr(error, "status_code", None)
    if status_code is None:
        return f"Network or API Error for PNR {label}"
    if status_code == 404:
        return f"PNR NOT FOUND {label}"
    return f"Error processing PNR {label}: {error}"


class BatchOrchestrator:
    """Runs token acquisition once, then one reconciliation task per record"""

    def __init__(
        self,
        client: ReservationAPIInterface,
        token_acquirer: TokenAcquirer = None,
        retriever: IdentityFallbackRetriever = None,
        reconciler: Reconciler = None,
        results_log: ResultsLog = None,
        identities: Sequence[str] = None,
    ):
        self.client = client
        self.token_acquirer = token_acquirer or TokenAcquirer(client)
        self.retriever = retriever or IdentityFallbackRetriever(client)
        self.reconciler = reconciler or Reconciler()
        self.results_log = results_log or ResultsLog()
        self.identities = list(identities or config.reservation_api.identities)

    async def reconcile_batch(self, records: Sequence[Any], mode: InputMode = InputMode.SPREADSHEET) -> BatchOutcome:
        """
        Reconcile a whole batch.

        Args:
            records: Raw spreadsheet rows or booking references
            mode: Which input adaptation applies to the records

        Returns:
            Results and errors, one entry per record

        Raises:
            BatchInputError: when there is nothing to process
            AuthExhausted: when no token could be acquired
        """
        if not records:
            raise BatchInputError("No booking records provided")

        adapter = INPUT_ADAPTERS[mode]
        token = await self.token_acquirer.acquire()

        logger.info("Reconciling batch", mode=mode.value, records=len(records))

        outcomes: List[RecordOutcome] = await asyncio.gather(
            *(
                self._process_record(raw, row_number, adapter, mode, token)
                for row_number, raw in enumerate(records, start=1)
            )
        )

        outcome = BatchOutcome()
        for item in outcomes:
            if item.is_error:
                outcome.errors.append(item.error)
            else:
                outcome.results.append(item.line)

        logger.info(
            "Batch reconciled",
            mode=mode.value,
            results=len(outcome.results),
            errors=len(outcome.errors),
        )
        return outcome

    async def _process_record(
        self,
        raw: Any,
        row_number: int,
        adapter: Callable[[Any, int], ExpectedRecord],
        mode: InputMode,
        token: str,
    ) -> RecordOutcome:
        label = f"row {row_number}"
        pnr = None
        try:
            record = adapter(raw, row_number)
            pnr = record.pnr
            label = record.label

            if not pnr:
                raise RecordValidationError("Missing PNR in input file.")
            if not validate_pnr(pnr):
                raise RecordValidationError(f"Invalid PNR format: {pnr}")

            live = await self.retriever.retrieve(pnr, token, self.identities)
            line, log_line = self._render(record, live, mode)
            status = self.reconciler.classify(record, live) if mode == InputMode.SPREADSHEET else None

        except Exception as e:
            logger.warning(
                "Record processing failed",
                pnr=pnr,
                row=row_number,
                error_type=type(e).__name__,
                error=str(e),
            )
            return RecordOutcome(pnr=pnr, row_number=row_number, error=describe_error(label, e))

        await self.results_log.append(log_line)
        return RecordOutcome(pnr=pnr, row_number=row_number, line=line, status=status)

    def _render(self, record: ExpectedRecord, live: LiveBooking, mode: InputMode):
        if mode == InputMode.SPREADSHEET:
            line = self.reconciler.reconciliation_line(record, live)
            return line, ResultsLog.flatten(line)

        line = self.reconciler.retrieval_line(record.pnr, live)
        if live.is_cancelled:
            locator = live.record_locator or record.pnr
            return line, f"{locator} is cancelled {live.email_address or live.identity}"
        return line, ResultsLog.flatten(line)
