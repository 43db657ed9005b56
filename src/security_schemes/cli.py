"""CLI entry point for security-schemes."""

import logging
from pathlib import Path

import click
from pydantic import ValidationError

from security_schemes.checker.validator import validate_schemes
from security_schemes.model.scheme import DEFAULT_API_KEY_NAME, SecuritySchemeObject
from security_schemes.parser.codec import DEFAULT_FORMAT, FORMATS, SchemeDecodeError, encode_scheme
from security_schemes.parser.document import load_security_schemes

KINDS = ("basic", "api-key", "bearer-jwt", "oauth")


def _parse_scopes(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str] | None:
    """Turn repeated NAME=DESCRIPTION options into a scope mapping."""
    if not values:
        return None
    scopes = {}
    for value in values:
        scope, sep, description = value.partition("=")
        if not sep or not scope:
            raise click.BadParameter(f"expected NAME=DESCRIPTION, got {value!r}")
        scopes[scope] = description
    return scopes


def _build_scheme(
    kind: str,
    name: str,
    authorization_url: str | None,
    token_url: str | None,
    scopes: dict[str, str] | None,
) -> SecuritySchemeObject:
    if kind == "basic":
        return SecuritySchemeObject.basic()
    elif kind == "api-key":
        return SecuritySchemeObject.api_key(name)
    elif kind == "bearer-jwt":
        return SecuritySchemeObject.bearer_jwt()

    if authorization_url is None:
        raise click.UsageError("--authorization-url is required for oauth schemes.")
    try:
        return SecuritySchemeObject.oauth(authorization_url, token_url=token_url, scopes=scopes)
    except ValidationError as e:
        raise click.BadParameter(str(e.errors()[0]["msg"]), param_hint="--authorization-url / --token-url") from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log decoding details to stderr.")
def main(verbose: bool):
    """Security Schemes: build and check OpenAPI security scheme objects."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("kind", type=click.Choice(KINDS))
@click.option("--name", default=DEFAULT_API_KEY_NAME, show_default=True, help="Header carrying the key (api-key).")
@click.option("--authorization-url", default=None, help="Authorization endpoint (oauth).")
@click.option("--token-url", default=None, help="Token endpoint (oauth).")
@click.option("--scope", "scopes", multiple=True, callback=_parse_scopes, help="Scope as NAME=DESCRIPTION, repeatable (oauth).")
@click.option("--description", default=None, help="Description of the scheme.")
@click.option("--format", "fmt", default=DEFAULT_FORMAT, show_default=True, envvar="SECURITY_SCHEMES_FORMAT", type=click.Choice(FORMATS), help="Output format.")
def show(
    kind: str,
    name: str,
    authorization_url: str | None,
    token_url: str | None,
    scopes: dict[str, str] | None,
    description: str | None,
    fmt: str,
):
    """Print a security scheme built from one of the common patterns."""
    scheme = _build_scheme(kind, name, authorization_url, token_url, scopes)
    if description:
        scheme = scheme.model_copy(update={"description": description})
    click.echo(encode_scheme(scheme, fmt).rstrip("\n"))


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Exit with status 1 when any scheme has issues.")
@click.pass_context
def check(ctx: click.Context, doc_path: Path, strict: bool):
    """Check the security schemes declared in an OpenAPI document."""
    try:
        schemes = load_security_schemes(doc_path)
    except SchemeDecodeError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not schemes:
        click.echo(f"No security schemes declared in {doc_path}.")
        return

    issues = validate_schemes(schemes)
    for name, scheme in schemes.items():
        found = issues.get(name, [])
        status = f"{len(found)} issue(s)" if found else "ok"
        click.echo(f"{name} ({scheme.type.value}): {status}")
        for issue in found:
            click.echo(f"  - {issue}")

    click.echo(f"Checked {len(schemes)} schemes, {len(issues)} with issues.")
    if strict and issues:
        ctx.exit(1)
