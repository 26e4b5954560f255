"""Cashbook MCP server."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Annotated, Literal

from mcp.server.fastmcp import FastMCP
from pydantic import Field as PydanticField, ValidationError

from .config import LOG_LEVEL, MCP_HOST, MCP_PORT
from .database import init_database
from .errors import CashbookError
from .models import MAX_VALUE
from .schemas import (
    BalanceRead,
    CategoryListResult,
    ImportResult,
    TransactionCreate,
    TransactionListResult,
    TransactionRead,
)
from .services import (
    BalanceService,
    CreateTransactionService,
    ImportTransactionsService,
    ListCategoriesService,
    ListTransactionsService,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

mcp = FastMCP("cashbook", host=MCP_HOST, port=MCP_PORT)

create_transaction_service = CreateTransactionService()
import_transactions_service = ImportTransactionsService()
balance_service = BalanceService()
list_transactions_service = ListTransactionsService()
list_categories_service = ListCategoriesService()


@mcp.tool(
    name="create_transaction",
    description="Record an income or outcome. Outcomes larger than the current balance are refused.",
    structured_output=True,
)
async def create_transaction(
    title: Annotated[str, PydanticField(description="Short description of the transaction.")],
    value: Annotated[
        Decimal,
        PydanticField(ge=0, le=MAX_VALUE, description="Transaction amount, never negative."),
    ],
    type: Annotated[
        Literal["income", "outcome"],
        PydanticField(description="Either income or outcome."),
    ],
    category: Annotated[
        str, PydanticField(description="Category title, created when it does not exist yet.")
    ],
) -> TransactionRead:
    """Record a single transaction."""

    try:
        payload = TransactionCreate(title=title, value=value, type=type, category=category)
    except ValidationError as exc:
        logger.warning("Transaction payload rejected: %s", exc)
        raise ValueError(f"Invalid transaction: {exc}") from exc

    try:
        return create_transaction_service.execute(payload)
    except CashbookError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to record transaction: %s", exc)
        raise ValueError(f"Failed to record transaction: {exc}") from exc


@mcp.tool(
    name="import_transactions",
    description=(
        "Import transactions from a CSV file with title,type,value,category columns. "
        "The file is deleted after a successful import."
    ),
    structured_output=True,
)
async def import_transactions(
    csv_file_path: Annotated[
        str, PydanticField(description="Path of the CSV file on the server.")
    ],
) -> ImportResult:
    """Import transactions from a CSV file."""

    try:
        return import_transactions_service.execute(csv_file_path)
    except CashbookError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to import %s: %s", csv_file_path, exc)
        raise ValueError(f"Failed to import transactions: {exc}") from exc


@mcp.tool(
    name="list_transactions",
    description="List every transaction together with the current balance.",
    structured_output=True,
)
async def list_transactions() -> TransactionListResult:
    """List transactions and the balance."""

    try:
        return list_transactions_service.execute()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to list transactions: %s", exc)
        raise ValueError(f"Failed to list transactions: {exc}") from exc


@mcp.tool(
    name="get_balance",
    description="Return total income, total outcome and their difference.",
    structured_output=True,
)
async def get_balance() -> BalanceRead:
    """Return the current balance."""

    try:
        return balance_service.execute()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to compute balance: %s", exc)
        raise ValueError(f"Failed to compute balance: {exc}") from exc


@mcp.tool(
    name="list_categories",
    description="List every known category.",
    structured_output=True,
)
async def list_categories() -> CategoryListResult:
    """List categories."""

    try:
        categories = list_categories_service.execute()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to list categories: %s", exc)
        raise ValueError(f"Failed to list categories: {exc}") from exc
    return CategoryListResult(total=len(categories), categories=categories)


def main() -> None:
    """Initialise the database and run the server."""

    try:
        init_database()

        logger.info("Cashbook MCP server started")
        mcp.run(transport="streamable-http")
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Server failed: %s", exc)
        raise
    finally:
        logger.info("Cashbook MCP server stopped")


if __name__ == "__main__":
    main()
