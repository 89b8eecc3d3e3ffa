# flask CLI helpers: `flask --app run create-user ...`, `flask --app run create-token ...`
import click
from flask.cli import with_appcontext
from flask_jwt_extended import create_access_token

from common.errors import ValidationError
from .services import UserService


@click.command("create-user")
@click.argument("username")
@click.argument("email")
@click.password_option()
@with_appcontext
def create_user_command(username: str, email: str, password: str):
    """Create a user account."""
    try:
        user = UserService().signup(
            {"username": username, "email": email, "password": password}
        )
    except ValidationError as e:
        raise click.ClickException(e.message)
    click.echo(f"Created user: {user.username}")


@click.command("create-token")
@click.argument("username")
@click.option("--no-expiry", is_flag=True, help="Mint a token that never expires.")
@with_appcontext
def create_token_command(username: str, no_expiry: bool):
    """Print an access token for USERNAME, without checking a password."""
    expires = False if no_expiry else None
    token = create_access_token(identity=username,
                                additional_claims={"name": username},
                                expires_delta=expires)
    click.echo(token)


commands = (create_user_command, create_token_command)
