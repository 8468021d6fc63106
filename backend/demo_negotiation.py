"""
Demo script to run complete negotiations and display them in the terminal.

WHAT: Scripted bargaining sessions against the simulated counterpart
WHY: Visual verification of reject / counter / accept behaviour
HOW: Seeded engine, a buyer session that splits the difference and a
     seller session that starts with an unrealistic ask
"""

import argparse
import random
import sys
from pathlib import Path

# Add backend to path if running directly
sys.path.insert(0, str(Path(__file__).parent))

from mandimind.core.negotiation_engine import NegotiationEngine
from mandimind.data.commodities import get_commodity_by_id
from mandimind.models.negotiation import NegotiationSession
from mandimind.services.response_generator import ResponseGenerator
from mandimind.utils.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)

MAX_DEMO_STEPS = 30


def print_banner(text: str, char: str = "="):
    """Print a formatted banner."""
    width = 80
    print(f"\n{char * width}\n{text.center(width)}\n{char * width}\n")


def print_new_messages(session: NegotiationSession, already_shown: int) -> int:
    """Print messages appended since the last call; return the new count."""
    for message in session.messages[already_shown:]:
        who = {"user": "YOU", "counterpart": "THEM", "system": "SYS"}[message.sender]
        print(f"  [{message.kind:>7}] {who:>4}: {message.text}")
    return len(session.messages)


def print_state(engine: NegotiationEngine, session: NegotiationSession):
    print(
        f"  market=₹{session.market_price}  you=₹{session.user_price}  "
        f"them=₹{session.counterpart_price}  round={session.round}  status={session.status}"
    )
    tip = engine.coaching_tip(session)
    if tip:
        print(f"  {tip.text}")


def run_split_strategy(engine: NegotiationEngine, commodity_id: str, language: str):
    """Buyer who keeps proposing the midpoint until the counterpart agrees."""
    print_banner(f"BUYER: {commodity_id} (split strategy, {language})")
    session = engine.start_session("buyer", get_commodity_by_id(commodity_id), language)
    shown = print_new_messages(session, 0)
    print_state(engine, session)

    for _ in range(MAX_DEMO_STEPS):
        if not session.is_active:
            break
        session = engine.quick_split(session)
        shown = print_new_messages(session, shown)
        print_state(engine, session)

    if session.status == "completed":
        print(f"\n  Deal: ₹{session.deal_price} x {session.quantity} = ₹{session.deal_total}")


def run_stubborn_seller(engine: NegotiationEngine, commodity_id: str, language: str):
    """Seller who opens at double the market, then nudges down by 5."""
    print_banner(f"SELLER: {commodity_id} (unrealistic opening, {language})")
    session = engine.start_session("seller", get_commodity_by_id(commodity_id), language)
    shown = print_new_messages(session, 0)

    session = engine.submit_offer(session, str(session.market_price * 2))
    shown = print_new_messages(session, shown)
    print_state(engine, session)

    for _ in range(MAX_DEMO_STEPS):
        if not session.is_active:
            break
        session = engine.quick_nudge(session, 5)
        shown = print_new_messages(session, shown)
        print_state(engine, session)

    if session.status == "completed":
        print(f"\n  Deal: ₹{session.deal_price} x {session.quantity} = ₹{session.deal_total}")
    else:
        print("\n  No deal within the demo step limit")


def main():
    parser = argparse.ArgumentParser(description="Play scripted negotiations in the terminal")
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--language", default="en", choices=["en", "hi", "te", "ta", "bn"])
    parser.add_argument("--commodity", default="tomato")
    args = parser.parse_args()

    engine = NegotiationEngine(
        rng=random.Random(args.seed),
        responder=ResponseGenerator(random.Random(args.seed)),
    )
    logger.info(f"Running demo (seed={args.seed}, language={args.language})")

    run_split_strategy(engine, args.commodity, args.language)
    run_stubborn_seller(engine, args.commodity, args.language)


if __name__ == "__main__":
    main()
