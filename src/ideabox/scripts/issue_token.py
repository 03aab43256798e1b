"""Print a dashboard bearer token for an actor.

Useful for local development and for wiring an external identity provider:

    python -m ideabox.scripts.issue_token 1234 --email me@example.com --role super_admin
"""
from __future__ import annotations

import argparse
import sys

from ideabox.core.security import create_access_token
from ideabox.db.session import SessionLocal
from ideabox.models import ActorOrigin, Role
from ideabox.repositories import ActorRepository


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("actor_id", help="Actor id (identity provider subject or Discord id)")
    parser.add_argument("--email", help="Email to store when creating the actor")
    parser.add_argument("--username", help="Username to store when creating the actor")
    parser.add_argument(
        "--origin",
        choices=[origin.value for origin in ActorOrigin],
        default=ActorOrigin.WEB.value,
    )
    parser.add_argument(
        "--role",
        choices=[role.value for role in Role],
        help="Bootstrap the actor's role (bypasses the super admin check)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    with SessionLocal() as db:
        actors = ActorRepository(db)
        actor = actors.upsert_actor(
            args.actor_id,
            origin=ActorOrigin(args.origin),
            email=args.email,
            username=args.username,
        )
        if args.role:
            actors.set_role(actor.id, Role(args.role))
        actors.commit()
    print(create_access_token(args.actor_id))
    return 0


if __name__ == "__main__":
    sys.exit(main())
