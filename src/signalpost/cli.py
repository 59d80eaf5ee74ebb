"""SignalPost command line: typer entry point."""

from __future__ import annotations

import json
import logging
from typing import NoReturn

import typer

from signalpost import config
from signalpost.client import Client
from signalpost.endpoints import Endpoint
from signalpost.errors import SignalPostError

app = typer.Typer(name="signalpost", no_args_is_help=True)

PRETTY = typer.Option(False, "--pretty", help="Human-readable output")
POST = typer.Option(False, "--post", help="Send the message in a POST body")
STORE = typer.Option(None, "--store/--no-store", help="Force storage on or off")
TTL = typer.Option(None, "--ttl", help="Storage lifetime in minutes")
META = typer.Option(None, "--meta", help="JSON object attached as metadata")
NO_REPLICATE = typer.Option(False, "--no-replicate", help="Do not replicate to other regions")
RAW = typer.Option(False, "--raw", help="Send MESSAGE verbatim, without JSON encoding")
VERBOSE = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr")


def _out(data: object, pretty: bool) -> None:
    if pretty:
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(json.dumps(data))


def _fail(message: str) -> NoReturn:
    typer.echo(json.dumps({"error": message}), err=True)
    raise typer.Exit(1)


def _reject_constant(name: str) -> object:
    raise ValueError(f"{name} is not valid JSON")


def _parse_message(message: str) -> object:
    """Accept JSON literals on the command line, falling back to plain text."""
    try:
        return json.loads(message, parse_constant=_reject_constant)
    except ValueError:
        return message


def _run(
    endpoint: Endpoint,
    channel: str,
    message: str,
    post: bool,
    store: bool | None,
    ttl: int | None,
    meta: str | None,
    no_replicate: bool,
    raw: bool,
    pretty: bool,
) -> None:
    endpoint.channel(channel).use_post(post).should_store(store).ttl(ttl)
    endpoint.replicate(not no_replicate)
    if meta is not None:
        try:
            endpoint.meta(json.loads(meta))
        except ValueError:
            _fail("--meta must be a JSON object")
    if raw:
        endpoint.do_not_serialize().message(message)
    else:
        endpoint.message(_parse_message(message))

    try:
        result = endpoint.sync()
    except SignalPostError as exc:
        _fail(str(exc))
    _out({"timetoken": result.timetoken}, pretty)


def _client(verbose: bool) -> Client:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        return Client(config.load_configuration())
    except ValueError as exc:
        _fail(str(exc))


@app.command()
def publish(
    channel: str,
    message: str,
    post: bool = POST,
    store: bool | None = STORE,
    ttl: int | None = TTL,
    meta: str | None = META,
    no_replicate: bool = NO_REPLICATE,
    raw: bool = RAW,
    pretty: bool = PRETTY,
    verbose: bool = VERBOSE,
) -> None:
    """Publish a message to a channel."""
    client = _client(verbose)
    _run(client.publish(), channel, message, post, store, ttl, meta, no_replicate, raw, pretty)


@app.command()
def signal(
    channel: str,
    message: str,
    post: bool = POST,
    store: bool | None = STORE,
    ttl: int | None = TTL,
    meta: str | None = META,
    no_replicate: bool = NO_REPLICATE,
    raw: bool = RAW,
    pretty: bool = PRETTY,
    verbose: bool = VERBOSE,
) -> None:
    """Send a lightweight signal to a channel."""
    client = _client(verbose)
    _run(client.signal(), channel, message, post, store, ttl, meta, no_replicate, raw, pretty)


@app.command("config")
def show_config(pretty: bool = PRETTY) -> None:
    """Show the resolved configuration (secrets masked)."""
    try:
        cfg = config.load_configuration()
    except ValueError as exc:
        _fail(str(exc))
    _out({
        "publish_key": cfg.publish_key,
        "subscribe_key": cfg.subscribe_key,
        "auth_key": "***" if cfg.auth_key else None,
        "cipher_key": "***" if cfg.cipher_key else None,
        "uuid": cfg.uuid,
        "origin": cfg.origin,
        "sdk": config.sdk_full_name(),
    }, pretty)
