"""
CSV rendering of SAC schedules.
Amounts are rounded to cents with a comma as decimal separator, matching spreadsheet
defaults in pt-BR locales.
"""
import csv
import io
import time

from app.core.utils import format_decimal_br
from app.sac.models import SimulationResult

CSV_HEADER = ["Parcela", "Amortização", "Juros", "Valor da Parcela", "Saldo Devedor"]


def export_csv(result: SimulationResult) -> str:
    """Serializes the schedule as CSV text, one row per installment."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for item in result.installments:
        writer.writerow([
            item.index,
            format_decimal_br(item.amortization),
            format_decimal_br(item.interest),
            format_decimal_br(item.payment_amount),
            format_decimal_br(item.remaining_balance),
        ])

    return buffer.getvalue()


def export_filename() -> str:
    return f"simulacao_sac_{int(time.time() * 1000)}.csv"
