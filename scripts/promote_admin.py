"""
Grants or revokes the admin flag for an existing user.

    python scripts/promote_admin.py --email firstuser@test.com
    python scripts/promote_admin.py --email firstuser@test.com --revoke

Tokens issued before the change keep their old flag until they expire, so the
user has to log in again to pick up the new role.
"""

import asyncio

import typer

from mallsapi.database import async_session_factory, dispose_engine
from mallsapi.exceptions import NotFoundError
from mallsapi.services.user_service import user_service

cli = typer.Typer()


async def set_admin_flag(email: str, is_admin: bool) -> None:
    try:
        async with async_session_factory() as db:
            profile = await user_service.set_admin(db, email, is_admin)
            await db.commit()
    finally:
        await dispose_engine()

    state = "granted to" if profile.is_admin else "revoked from"
    typer.echo(f"Admin role {state} {profile.email} ({profile.id})")


@cli.command()
def main(
    email: str = typer.Option(
        ..., "--email", "-e",
        prompt="User email",
        help="Email address of a registered user.",
    ),
    revoke: bool = typer.Option(
        False, "--revoke",
        help="Clear the admin flag instead of setting it.",
    ),
):
    """Sets the is_admin flag for a Malls API user."""
    try:
        asyncio.run(set_admin_flag(email, not revoke))
    except NotFoundError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
