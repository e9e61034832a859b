"""
Lesson cart command-line client.

Usage:
    lesson-cart lessons [--sort FIELD] [--desc] [--export PATH]
    lesson-cart search QUERY [--sort FIELD] [--desc]
    lesson-cart order --lesson ID [--lesson ID ...] --name NAME --phone PHONE
                      [--card NUMBER --expiry MM/YY --cvc CVC] [--dry-run]

Examples:
    # List lessons, cheapest first
    lesson-cart lessons --sort price

    # Search and export
    lesson-cart search math --sort space --desc

    # Book two places in one lesson
    lesson-cart order --lesson 64f1c0 --lesson 64f1c0 --name "Ann Lee" --phone 5551234

    # Use a local backend
    export CART_API_BASE_URL="http://localhost:3000"
    lesson-cart lessons
"""

import sys
import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from .api.client import LessonsApiClient
from .api.client_config import ApiClientConfig
from .api.interfaces import LessonsApi
from .cart import derived
from .controller import CartController
from .models.lesson import Lesson, SORT_FIELDS
from .models.order import CheckoutOutcome, Order, Payment
from .models.state import CartState
from .utils.config import config
from .utils.file_utils import lessons_to_dataframe, save_csv, save_json
from .utils.logger import setup_logger
from .validation.customer_validator import CustomerValidator
from .validation.payment_validator import PaymentValidator


logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="lesson-cart",
        description="Browse and book lessons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--base-url",
        help="Backend URL (overrides CART_API_BASE_URL env var)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL env var or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sort_parent = argparse.ArgumentParser(add_help=False)
    sort_parent.add_argument(
        "--sort",
        choices=SORT_FIELDS,
        default="topic",
        help="Field to sort by (default: topic)"
    )
    sort_parent.add_argument(
        "--desc",
        action="store_true",
        help="Sort in descending order"
    )
    sort_parent.add_argument(
        "--export",
        type=Path,
        help="Also write the list to this CSV file"
    )

    subparsers.add_parser("lessons", parents=[sort_parent], help="List all lessons")

    search_parser = subparsers.add_parser("search", parents=[sort_parent], help="Search lessons")
    search_parser.add_argument("query", help="Search text")

    order_parser = subparsers.add_parser("order", help="Place an order")
    order_parser.add_argument(
        "--lesson",
        dest="lessons",
        action="append",
        required=True,
        help="Lesson id to book (repeat for several places)"
    )
    order_parser.add_argument("--name", required=True, help="Customer name")
    order_parser.add_argument("--phone", required=True, help="Customer phone number")
    order_parser.add_argument("--card", help="Card number (mock payment)")
    order_parser.add_argument("--expiry", help="Card expiry, MM/YY (mock payment)")
    order_parser.add_argument("--cvc", help="Card CVC (mock payment)")
    order_parser.add_argument(
        "--require-payment",
        action="store_true",
        help="Refuse to order without valid payment details "
             "(default: CART_REQUIRE_PAYMENT env var)"
    )
    order_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and show the order without submitting it"
    )
    order_parser.add_argument(
        "--report-dir",
        type=Path,
        help="Directory for the order report (default: OUTPUT_DIR/reports)"
    )

    return parser.parse_args(argv)


def display_lessons(lessons: List[Lesson]):
    """Print the lesson table."""
    print("\n" + "=" * 72)
    print(f"{'ID':<26s} {'TOPIC':<16s} {'LOCATION':<14s} {'PRICE':>7s} {'SPACE':>5s}")
    print("=" * 72)
    for lesson in lessons:
        print(
            f"{lesson.id:<26s} {lesson.topic:<16s} {lesson.location:<14s} "
            f"{lesson.price:>7} {lesson.space:>5d}"
        )
    print("=" * 72)
    print(f"{len(lessons)} lessons")


def display_cart(state: CartState):
    """Print the cart contents and total."""
    print("\n" + "=" * 60)
    print("CART")
    print("=" * 60)
    for idx, item in enumerate(state.cart, 1):
        print(f"{idx:2d}. {item.topic:<20s} | {item.location:<14s} | {item.price}")
    print("-" * 60)
    print(f"Items: {derived.cart_count(state)}    Total: {derived.cart_total(state)}")
    print("=" * 60)


def save_order_report(outcome: CheckoutOutcome, state: CartState, report_dir: Path) -> Path:
    """
    Save the order report as JSON plus a CSV of the ordered lessons.

    Returns:
        Path of the JSON report
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    report = {
        "timestamp": timestamp,
        "outcome": outcome.to_dict(),
        "lessons": [item.to_dict() for item in state.cart],
    }

    json_path = report_dir / f"order_report_{timestamp}.json"
    save_json(report, json_path)
    print(f"\nReport saved to: {json_path}")

    if state.cart:
        csv_path = report_dir / f"order_items_{timestamp}.csv"
        save_csv(lessons_to_dataframe(state.cart), csv_path)
        print(f"Order items saved to: {csv_path}")

    return json_path


def run_listing(controller: CartController, args: argparse.Namespace) -> int:
    if args.command == "search":
        print(f"\nSearching lessons for '{args.query}'...")
        state = controller.fetch_search_results(args.query)
    else:
        print("\nRetrieving lessons...")
        state = controller.fetch_lessons()

    if state is None:
        print("ERROR: Could not retrieve lessons (see log for details)")
        return 1

    if not state.lessons:
        print("No lessons found.")
        return 0

    state = controller.set_sort(args.sort, "desc" if args.desc else "asc")
    lessons = derived.sorted_lessons(state)
    display_lessons(lessons)

    if args.export:
        df = lessons_to_dataframe(lessons)
        if not save_csv(df, args.export):
            print(f"ERROR: Could not write {args.export}")
            return 1
        print(f"Lessons exported to: {args.export}")

    return 0


def run_order(controller: CartController, args: argparse.Namespace) -> int:
    # Step 1: Load lessons
    print("\n[1/4] Retrieving lessons...")
    state = controller.load()
    if state is None:
        print("ERROR: Could not retrieve lessons (see log for details)")
        return 1
    if not state.lessons:
        print("ERROR: No lessons available")
        return 1
    print(f"✓ Retrieved {len(state.lessons)} lessons")

    # Step 2: Fill the cart
    print(f"\n[2/4] Adding {len(args.lessons)} places to the cart...")
    for lesson_id in args.lessons:
        if controller.state.find_lesson(lesson_id) is None:
            print(f"ERROR: Unknown lesson: {lesson_id}")
            return 1
        if not derived.can_add(controller.state, lesson_id):
            print(f"ERROR: No space left in lesson: {lesson_id}")
            return 1
        controller.add_to_cart(lesson_id)
    display_cart(controller.state)

    # Step 3: Customer and payment details
    print("\n[3/4] Checking customer details...")
    state = controller.update_customer(name=args.name, phone=args.phone)
    validation = CustomerValidator().validate(state.customer)

    card, expiry, cvc = args.card or "", args.expiry or "", args.cvc or ""
    payment = Payment.from_plain(card, expiry, cvc)
    if not payment.is_empty:
        state = controller.update_payment(card, expiry, cvc)
    if not payment.is_empty or controller.require_payment:
        validation.merge(PaymentValidator().validate(state.payment))

    if not validation.is_valid:
        print(validation.get_summary())
        return 1
    print("✓ Details valid")

    if args.dry_run:
        order = Order.from_cart(state.customer, state.cart)
        print("\n[4/4] DRY RUN - Order not submitted:")
        print(f"  {order.to_dict()}")
        return 0

    # Step 4: Submit
    print("\n[4/4] Submitting order...")
    ordered = controller.state
    outcome = controller.checkout()
    if outcome is None:
        print("ERROR: Order was not submitted")
        return 1

    print(("✓ " if outcome.is_success else "✗ ") + outcome.confirmation)
    save_order_report(outcome, ordered, args.report_dir or config.output_dir / "reports")

    return 0 if outcome.is_success else 1


def main(argv: Optional[Sequence[str]] = None, api: Optional[LessonsApi] = None) -> int:
    """
    Main execution function.

    Args:
        argv: Arguments (defaults to sys.argv)
        api: Backend to use instead of the HTTP client
    """
    args = parse_arguments(argv)

    log_level = args.log_level or config.log_level
    setup_logger("lesson_cart", level=getattr(logging, log_level, logging.INFO))

    try:
        config.validate()

        if api is None:
            api = LessonsApiClient(ApiClientConfig.from_config(config, base_url=args.base_url))

        require_payment = config.require_payment or getattr(args, "require_payment", False)

        with api, CartController(
            api,
            require_payment=require_payment,
            debounce_delay=config.search_debounce_seconds,
            max_workers=config.update_workers
        ) as controller:
            if args.command == "order":
                return run_order(controller, args)
            return run_listing(controller, args)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
