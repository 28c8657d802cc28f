"""Backup/restore of the ledger as JSON, monthly CSV export, and demo data."""
import csv
import io
import json
import random
from datetime import date, datetime

from loguru import logger

from database.category_dao import category_to_record
from database.ledger_dao import model_to_record, new_id, record_to_model
from models.transaction import Transaction
from services.category_service import CategoryService
from services.errors import ExportError, ImportFormatError
from services.filter_service import in_month
from services.transaction_service import TransactionService
from utils.constants import SAMPLE_NOTES
from utils.currency import format_plain
from utils.date_helpers import add_months, format_date, friendly_month, today

CSV_HEADER = ["Date", "Type", "Category", "Amount", "Note"]


class DataService:
    def __init__(self, tx_service: TransactionService, category_service: CategoryService):
        self._tx_svc = tx_service
        self._cat_svc = category_service

    # ── JSON export ───────────────────────────────────────────────────────────

    def export_json(self, now: datetime | None = None) -> dict:
        """Return a full backup dict (caller writes to disk)."""
        moment = now or datetime.now()
        return {
            "transactions": [model_to_record(t) for t in self._tx_svc.get_all()],
            "categories": [category_to_record(c) for c in self._cat_svc.get_all()],
            "exportDate": moment.isoformat(),
        }

    def backup_filename(self, now: datetime | None = None) -> str:
        moment = now or datetime.now()
        return f"expense-tracker-backup-{moment.date().isoformat()}.json"

    def write_json(self, path: str, now: datetime | None = None) -> None:
        data = self.export_json(now)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info(f"Exported {len(data['transactions'])} transactions to {path}")

    # ── JSON import ───────────────────────────────────────────────────────────

    def parse_import(self, text: str) -> list[Transaction]:
        """Validate backup text and return its transactions.

        Only the shape of the file is checked; individual records are taken
        as they are.
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            logger.warning(f"Rejected import: unreadable JSON ({e})")
            raise ImportFormatError("Error reading file") from e

        if not isinstance(data, dict) or not isinstance(data.get("transactions"), list):
            logger.warning("Rejected import: no transactions array")
            raise ImportFormatError("Invalid file format")

        # Entries that are not objects still count, as records with only a generated id
        return [record_to_model(r if isinstance(r, dict) else {}) for r in data["transactions"]]

    def import_json(self, text: str, confirm=None) -> int:
        """Prepend the file's transactions to the ledger.

        confirm(count) -> bool is asked once before anything changes; a False
        answer leaves the ledger untouched and returns 0.
        """
        incoming = self.parse_import(text)
        if confirm is not None and not confirm(len(incoming)):
            return 0
        count = self._tx_svc.prepend_many(incoming)
        logger.info(f"Imported {count} transactions")
        return count

    def import_file(self, path: str, confirm=None) -> int:
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Rejected import: cannot read {path} ({e})")
            raise ImportFormatError("Error reading file") from e
        return self.import_json(text, confirm)

    # ── CSV export ────────────────────────────────────────────────────────────

    def export_csv(self, month: str) -> str:
        """CSV text for every transaction dated in month (filters ignored)."""
        month_txs = [t for t in self._tx_svc.get_all() if in_month(t, month)]
        if not month_txs:
            raise ExportError("No transactions to export for this month")

        buf = io.StringIO()
        csv.writer(buf, lineterminator="\n").writerow(CSV_HEADER)
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for tx in month_txs:
            writer.writerow([
                tx.date,
                tx.type,
                self._cat_svc.resolve(tx.category_id).name,
                format_plain(tx.amount),
                tx.note or "",
            ])
        return buf.getvalue().rstrip("\n")

    def csv_filename(self, month: str) -> str:
        return f"expenses-{friendly_month(month).replace(' ', '-')}.csv"

    def write_csv(self, path: str, month: str) -> None:
        content = self.export_csv(month)
        with open(path, "w", newline="", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Exported {month} to {path}")

    # ── Demo data ─────────────────────────────────────────────────────────────

    def generate_sample_transactions(
        self,
        months: int = 6,
        rng: random.Random | None = None,
        ref_date: date | None = None,
    ) -> list[Transaction]:
        """6-18 random transactions per month for the last `months` months, newest first."""
        rng = rng or random.Random()
        ref = (ref_date or today()).replace(day=1)
        income_cats = self._cat_svc.get_for_type("income")
        expense_cats = self._cat_svc.get_for_type("expense")
        all_cats = self._cat_svc.get_all()
        created = datetime.now().isoformat()

        results = []
        for m in range(months):
            month_start = add_months(ref, -m)
            for _ in range(rng.randint(6, 18)):
                is_income = rng.random() < 0.12
                pool = (income_cats if is_income else expense_cats) or all_cats
                cat = rng.choice(pool)
                amount = rng.randint(10000, 60000) if is_income else rng.randint(50, 6000)
                results.append(Transaction(
                    id=new_id(),
                    amount=float(amount),
                    type="income" if is_income else "expense",
                    category_id=cat.id,
                    date=format_date(month_start.replace(day=rng.randint(1, 28))),
                    note=rng.choice(SAMPLE_NOTES),
                    created_at=created,
                ))

        results.sort(key=lambda t: t.date, reverse=True)
        return results

    def load_demo_data(self, rng: random.Random | None = None) -> int:
        samples = self.generate_sample_transactions(rng=rng)
        self._tx_svc.replace_all(samples)
        logger.info(f"Loaded {len(samples)} demo transactions")
        return len(samples)
