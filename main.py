# main.py
"""Command line entry point for the trade journal analytics."""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from src.config.settings import Settings
from src.journal import (
    AnalyticsReport,
    JournalManager,
    TradeImportError,
    evaluate_goals,
)
from src.journal.accounts import Account
from src.journal.models import normalize_tags


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


def load_and_validate_config(config_path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load and validate configuration.

    Returns:
        Settings loaded from YAML, or defaults when the file is absent.

    Raises:
        SystemExit: If the YAML cannot be parsed or fails validation.
    """
    load_dotenv()

    try:
        settings = Settings.load(config_path)
    except (OSError, ValidationError, ValueError) as e:
        logger.error(f"Failed to parse {config_path}: {e}")
        sys.exit(1)

    if config_path.exists():
        logger.info(f"✓ Settings loaded from {config_path}")
    else:
        logger.info(f"{config_path} not found, using defaults")

    create_data_dirs(settings)
    return settings


def create_data_dirs(settings: Settings) -> None:
    """Create the account data directory if it doesn't exist."""
    Path(settings.journal.data_dir).mkdir(parents=True, exist_ok=True)


def print_startup_banner(settings: Settings) -> None:
    """Print startup banner."""
    logger.info("=" * 60)
    logger.info(f"{settings.system.name} v{settings.system.version}")
    logger.info(f"Data: {settings.journal.data_dir}")
    logger.info("=" * 60)


def format_report(report: AnalyticsReport, currency: str = "$") -> str:
    """Render the headline metrics of a report as text."""
    lines = [
        f"Trades:          {report.total_trades}",
        f"Total profit:    {currency}{report.total_profit:,.2f}",
        f"Win rate:        {report.win_rate:.1f}% "
        f"({report.winning_trades}W / {report.losing_trades}L)",
        f"Profit factor:   {report.profit_factor.format()}",
        f"Average win:     {currency}{report.average_win:,.2f}",
        f"Average loss:    {currency}{report.average_loss:,.2f}",
        f"Risk/reward:     {report.risk_reward_ratio.format()}",
        f"Max drawdown:    {currency}{report.max_drawdown:,.2f} "
        f"({report.max_drawdown_percent:.1f}%)",
    ]

    if report.symbols:
        lines.append("")
        lines.append(f"{'Symbol':<10} {'Profit':>12} {'Win %':>7} {'Trades':>7}")
        for s in report.symbols:
            lines.append(f"{s.symbol:<10} {s.profit:>12,.2f} {s.win_rate:>7.1f} {s.trades:>7}")

    if report.monthly:
        lines.append("")
        lines.append(f"{'Month':<10} {'Profit':>12} {'Trades':>7}")
        for p in report.monthly:
            lines.append(f"{p.period:<10} {p.profit:>12,.2f} {p.trades:>7}")

    return "\n".join(lines)


async def cmd_import(manager: JournalManager, args: argparse.Namespace) -> int:
    """Import a CSV export as a new account."""
    try:
        csv_text = Path(args.file).read_text(encoding="utf-8-sig")
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 1

    accounts = await manager.load_accounts()
    try:
        accounts = await manager.import_account(accounts, csv_text, name=args.name)
    except TradeImportError as e:
        logger.error(f"Failed to process data: {e}. Please check the file format.")
        return 1

    account = accounts[-1]
    print(f"{account.id}  {account.name}  ({len(account.trades)} trades)")
    return 0


async def cmd_sample(manager: JournalManager, args: argparse.Namespace) -> int:
    """Import generated sample data as a new account."""
    accounts = await manager.import_sample(await manager.load_accounts())
    account = accounts[-1]
    print(f"{account.id}  {account.name}  ({len(account.trades)} trades)")
    return 0


async def cmd_accounts(manager: JournalManager, args: argparse.Namespace) -> int:
    """List stored accounts."""
    accounts = await manager.load_accounts()
    if not accounts:
        print("No accounts. Import a CSV file first.")
        return 0

    for account in accounts:
        report = account.report()
        print(
            f"{account.id}  {account.name:<24} {report.total_trades:>6} trades "
            f"{report.total_profit:>12,.2f}"
        )
    return 0


async def cmd_report(
    manager: JournalManager, args: argparse.Namespace, settings: Settings
) -> int:
    """Print the analytics report for an account or the portfolio."""
    accounts: list[Account] = await manager.load_accounts()
    if not accounts:
        logger.error("No accounts stored. Import a CSV file first.")
        return 1

    if args.portfolio and len(accounts) < 2:
        logger.error("Portfolio view needs at least two accounts")
        return 1

    try:
        report = manager.build_report(
            accounts,
            account_id=args.account,
            portfolio=args.portfolio,
            tags=normalize_tags(args.tag or ()),
        )
    except KeyError as e:
        logger.error(e.args[0])
        return 1

    print(format_report(report, settings.dashboard.currency_symbol))

    if not args.portfolio:
        account = next(a for a in accounts if a.id == (args.account or accounts[0].id))
        progress = evaluate_goals(account.goals, report)
        if progress:
            print("")
            for goal in progress:
                print(
                    f"{goal.label:<16} {goal.current:>10.1f} / {goal.target:<10.1f} "
                    f"{goal.progress_percent:5.1f}% [{goal.status.value}]"
                )

    if args.json:
        Path(args.json).write_text(json.dumps(report.to_dict(), indent=2))
        logger.info(f"Report written to {args.json}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradepulse",
        description="Trade journal analytics",
    )
    parser.add_argument(
        "-c", "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to settings YAML",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    import_parser = subparsers.add_parser("import", help="Import a trade history CSV")
    import_parser.add_argument("file", help="CSV file with ticket, closeTime, symbol, profit")
    import_parser.add_argument("--name", help="Account name (default: Account N)")

    subparsers.add_parser("sample", help="Import generated sample data")
    subparsers.add_parser("accounts", help="List stored accounts")

    report_parser = subparsers.add_parser("report", help="Show analytics report")
    report_parser.add_argument("--account", help="Account id (default: first account)")
    report_parser.add_argument(
        "--portfolio",
        action="store_true",
        help="Combine all accounts",
    )
    report_parser.add_argument(
        "--tag",
        action="append",
        help="Only trades with this tag (repeatable, all must match)",
    )
    report_parser.add_argument("--json", help="Also write the full report as JSON")

    return parser


async def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = load_and_validate_config(Path(args.config))
    print_startup_banner(settings)
    manager = JournalManager(settings.journal, timezone=settings.system.timezone)

    if args.command == "report":
        return await cmd_report(manager, args, settings)

    commands = {
        "import": cmd_import,
        "sample": cmd_sample,
        "accounts": cmd_accounts,
    }
    return await commands[args.command](manager, args)


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
