"""
CSV import of militaries.

The expected layout is ``Nome, Posto/Graduação, Arma, Grau[, Esquadrão]``.
A header row is optional; when present, columns are matched by name and
may appear in any order.  Each row is validated on its own: bad rows are
reported with their line number and skipped, good rows are imported.
"""

import io
import logging
import re
import unicodedata
from typing import Optional

import pandas as pd
from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlmodel import Session

from app.roster.ranks import Grade, Rank, grade_for_rank
from app.schemas.military import ImportRowError, MilitaryCreate, MilitaryImportResult
from app.services.military_service import MilitaryService

logger = logging.getLogger(__name__)

POSITIONAL_COLUMNS = ["name", "rank", "branch", "degree", "squadron"]

_HEADER_ALIASES: dict[str, str] = {
    "nome": "name",
    "name": "name",
    "posto/graduacao": "rank",
    "posto/grad.": "rank",
    "posto": "rank",
    "graduacao": "rank",
    "rank": "rank",
    "arma": "branch",
    "branch": "branch",
    "grau": "degree",
    "degree": "degree",
    "grade": "degree",
    "esquadrao": "squadron",
    "esquadrilha": "squadron",
    "squadron": "squadron",
    "nome de guerra": "war_name",
    "war_name": "war_name",
    "ano de formacao": "formation_year",
    "formation_year": "formation_year",
}


class CSVImportError(ValueError):
    """The uploaded file cannot be read as CSV."""


def _fold(text: str) -> str:
    """Lower-case and strip accents for header matching."""
    normalized = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(c for c in normalized if not unicodedata.combining(c))


def normalize_rank(value: str) -> str:
    """Accept ``3o``/``3°`` spellings of the ordinal indicator."""
    value = re.sub(r"\s+", " ", value.strip()).replace("°", "º")
    return re.sub(r"^(\d)[oO](?=\s)", r"\1º", value)


def _parse_grade(value: str) -> Optional[Grade]:
    folded = _fold(value)
    if folded == "oficial":
        return Grade.OFFICER
    if folded == "praca":
        return Grade.ENLISTED
    return None


def read_csv_frame(content: bytes) -> pd.DataFrame:
    """
    Decode and split the upload into a frame of strings (no header handling).

    The frame is indexed by the 1-based line number in the file and is as
    wide as the widest row; shorter rows are padded with empty strings.
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CSVImportError(f"O arquivo não está em UTF-8: {e}") from e

    lines = text.splitlines()
    first = next((i for i, line in enumerate(lines) if line.strip()), None)
    if first is None:
        raise CSVImportError("O arquivo está vazio")
    lines = lines[first:]

    sep = ";" if lines[0].count(";") > lines[0].count(",") else ","
    width = max(line.count(sep) for line in lines) + 1
    try:
        frame = pd.read_csv(io.StringIO("\n".join(lines)), sep=sep, header=None, names=list(range(width)),
                            dtype=str, keep_default_na=False, skip_blank_lines=False, skipinitialspace=True, )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise CSVImportError(f"Erro ao analisar o arquivo CSV: {e}") from e
    frame.index = range(first + 1, first + 1 + len(frame))
    return frame.fillna("")


def _header_mapping(row: list[str]) -> Optional[dict[int, str]]:
    mapping = { i: _HEADER_ALIASES[_fold(cell)] for i, cell in enumerate(row) if _fold(cell) in _HEADER_ALIASES }
    if "name" in mapping.values() and "rank" in mapping.values():
        return mapping
    return None


def parse_militaries_csv(content: bytes, default_squadron: Optional[str] = None,
                         ) -> tuple[list[MilitaryCreate], list[ImportRowError]]:
    """
    Parse an uploaded CSV into validated militaries.

    Args:
        content: Raw file bytes
        default_squadron: Squadron used for rows that do not carry one

    Returns:
        Tuple of (valid militaries, row errors)

    Raises:
        CSVImportError: If the file cannot be read at all
    """
    frame = read_csv_frame(content)
    rows = [(line, [str(cell).strip() for cell in cells]) for line, *cells in frame.itertuples(name=None)]

    mapping = _header_mapping(rows[0][1]) if rows else None
    if mapping is not None:
        header = rows.pop(0)[1]
        width = max(i for i, cell in enumerate(header) if cell) + 1
    else:
        mapping = { i: column for i, column in enumerate(POSITIONAL_COLUMNS) }
        width = len(POSITIONAL_COLUMNS)

    parsed: list[MilitaryCreate] = []
    errors: list[ImportRowError] = []
    for line, row in rows:
        if not any(row):
            continue
        if any(row[width:]):
            errors.append(ImportRowError(line=line, message=f"Colunas em excesso (esperadas no máximo {width})"))
            continue
        record = { column: row[i] for i, column in mapping.items() if i < len(row) and row[i] }
        try:
            parsed.append(_row_to_military(record, default_squadron))
        except ValueError as e:
            errors.append(ImportRowError(line=line, message=_error_message(e)))
    return parsed, errors


def _row_to_military(record: dict[str, str], default_squadron: Optional[str]) -> MilitaryCreate:
    if "rank" in record:
        record["rank"] = normalize_rank(record["rank"])
        if record["rank"] not in {r.value for r in Rank}:
            raise ValueError(f"Posto/Graduação desconhecido: {record['rank']}")

    degree = record.pop("degree", None)
    if degree and "rank" in record:
        grade = _parse_grade(degree)
        if grade is None:
            raise ValueError(f"Grau desconhecido: {degree}")
        if grade != grade_for_rank(record["rank"]):
            raise ValueError(f"Grau {degree} não corresponde ao posto {record['rank']}")

    if "squadron" not in record:
        if not default_squadron:
            raise ValueError("Esquadrão não informado")
        record["squadron"] = default_squadron

    if "formation_year" in record:
        try:
            record["formation_year"] = int(record["formation_year"])
        except ValueError:
            raise ValueError(f"Ano de formação inválido: {record['formation_year']}") from None

    return MilitaryCreate(**record)


def _error_message(error: ValueError) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in error.errors())
    return str(error)


class MilitaryImportService:
    """Service for CSV import of militaries."""

    def __init__(self, session: Session):
        self.military_service = MilitaryService(session)

    def import_csv(self, content: bytes, default_squadron: Optional[str] = None,
                   dry_run: bool = False, ) -> MilitaryImportResult:
        try:
            parsed, errors = parse_militaries_csv(content, default_squadron)
        except CSVImportError as e:
            logger.warning("CSV import rejected: %s", e)
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

        result = MilitaryImportResult(dry_run=dry_run, parsed=parsed, errors=errors)
        if dry_run or not parsed:
            return result

        result.imported = self.military_service.create_many(parsed)
        logger.info("CSV import: %d imported, %d rows rejected", len(result.imported), len(errors))
        return result
