#!/usr/bin/env python3
"""
Guidely command-line client.
Sign in to the tour marketplace and open the dashboard for your role.
"""

import argparse
import getpass
import logging
import sys
from datetime import date
from typing import Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)

#
# NOTE: Keep guidely imports lazy (inside functions) so `--help` stays fast.
#


def _password(value: Optional[str]) -> str:
    if value:
        return value
    return getpass.getpass("Password: ")


def print_whoami(session) -> None:
    """Print the signed-in identity (never the credential)."""
    user = session.user
    if user is None:
        print("Not signed in.")
        return
    print(f"👤 {user.name or user.email or user.id} <{user.email or 'no email'}>")
    print(f"🏷️ Role: {user.role.value}")
    expires = session.credential_expires_at()
    if expires is not None:
        print(f"⏳ Session token expires: {expires.strftime('%Y-%m-%d %H:%MZ')}")


def run_command(args: argparse.Namespace, session, cfg) -> int:
    import asyncio

    from guidely.api.client import ApiClient
    from guidely.auth.client import AuthClient
    from guidely.auth.models import Role
    from guidely.auth.util import sanitize_callback_path
    from guidely.views.dashboard import render_dashboard

    client = AuthClient(session, cfg)
    next_path = sanitize_callback_path(args.next)

    if args.logout:
        client.logout()
        print("👋 Signed out.")
        return 0

    if args.login:
        user = asyncio.run(client.login(args.login, _password(args.password)))
        print(f"✅ Welcome back, {user.first_name() or user.email}!")
        print(f"➡️ Continue at {next_path}")
        return 0

    if args.register:
        if not args.name:
            print("❌ --name is required with --register", file=sys.stderr)
            return 2
        role = Role(args.role)
        user = asyncio.run(client.register(args.name, args.register, _password(args.password), role))
        print(f"✅ Welcome to Guidely! Your {user.role.value} account is ready.")
        return 0

    if args.google_id_token:
        if not cfg.google_enabled:
            print("❌ Google sign-in is not configured (set GUIDELY_GOOGLE_CLIENT_ID)", file=sys.stderr)
            return 2
        user = asyncio.run(client.sign_in_with_google(args.google_id_token))
        print(f"✅ Signed in with Google as {user.email or user.id}.")
        print(f"➡️ Continue at {next_path}")
        return 0

    if args.whoami:
        print_whoami(session)
        return 0

    if args.dashboard:
        print(render_dashboard(session, ApiClient(cfg, session), date.today()), end="")
        return 0

    if args.explore:
        from guidely.views.explore import filter_tours, render_explore

        tours = filter_tours(
            ApiClient(cfg, session).list_listings(),
            query=args.query,
            category=args.category,
            min_price=args.min_price,
            max_price=args.max_price,
            sort_by=args.sort,
        )
        print(render_explore(tours), end="")
        return 0

    if args.toggle_listing:
        user = session.user
        if user is None:
            print("❌ Please log in to manage your listings", file=sys.stderr)
            return 1
        if user.role is not Role.GUIDE:
            print("❌ Only guides can activate or deactivate listings", file=sys.stderr)
            return 2
        ApiClient(cfg, session).toggle_listing(args.toggle_listing)
        print(f"✅ Listing {args.toggle_listing} toggled.")
        return 0

    return -1


def main(argv: Optional[list] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Guidely tour marketplace client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sign in (prompts for the password)
  python main.py --login ana@example.com

  # Create a guide account
  python main.py --register ana@example.com --name "Ana Silva" --role GUIDE

  # Show the dashboard for your role
  python main.py --dashboard

  # Find food tours under $100, cheapest first
  python main.py --explore --category "Food & Drink" --max-price 100 --sort price-low
        """,
    )

    parser.add_argument("--login", metavar="EMAIL", help="Sign in with email and password")
    parser.add_argument("--register", metavar="EMAIL", help="Create an account and sign in")
    parser.add_argument("--name", help="Display name (used with --register)")
    parser.add_argument(
        "--role",
        default="TOURIST",
        choices=["TOURIST", "GUIDE", "ADMIN"],
        help="Account role (used with --register) (default: TOURIST)",
    )
    parser.add_argument("--password", help="Password (prompted when omitted)")
    parser.add_argument(
        "--google-id-token",
        metavar="TOKEN",
        help="Sign in with a Google ID token from Google Identity Services",
    )
    parser.add_argument("--logout", action="store_true", help="Sign out (local only)")
    parser.add_argument("--whoami", action="store_true", help="Show the signed-in user")
    parser.add_argument("--dashboard", action="store_true", help="Show the dashboard for your role")
    parser.add_argument("--explore", action="store_true", help="Browse tours")
    parser.add_argument("--query", help="Search title, city and description (used with --explore)")
    parser.add_argument("--category", help="Only tours in this category (used with --explore)")
    parser.add_argument("--min-price", type=float, help="Lowest tour fee (used with --explore)")
    parser.add_argument("--max-price", type=float, help="Highest tour fee (used with --explore)")
    parser.add_argument(
        "--sort",
        default="recommended",
        choices=["recommended", "price-low", "price-high", "rating"],
        help="Sort order for --explore (default: recommended)",
    )
    parser.add_argument("--toggle-listing", metavar="ID", help="Activate or deactivate one of your listings (guides)")
    parser.add_argument("--next", default="/", help="Path to continue at after sign-in (default: /)")

    args = parser.parse_args(argv)

    from guidely.api.client import ApiError
    from guidely.auth.config import load_client_config
    from guidely.auth.errors import AuthError
    from guidely.auth.session import Session
    from guidely.storage.local_store import LocalStorage
    from guidely.views.gate import LOADING_TEXT, auth_gate

    cfg = load_client_config()
    session = Session(LocalStorage(cfg.storage_path))
    session.restore()

    def _loading() -> int:
        print(LOADING_TEXT, file=sys.stderr)
        return 1

    try:
        rc = auth_gate(session, lambda: run_command(args, session, cfg), _loading)
    except (AuthError, ApiError) as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1

    if rc < 0:
        # No arguments provided
        parser.print_help()
        print("\n💡 Tip: Use `--login EMAIL` to sign in")
        return 0
    return rc


if __name__ == "__main__":
    sys.exit(main())
