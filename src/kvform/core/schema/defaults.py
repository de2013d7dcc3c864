"""Built-in server settings schemas."""

from __future__ import annotations

from .types import (
    Array,
    Duration,
    DynamicSource,
    Entry,
    Field,
    Input,
    List,
    Rate,
    Record,
    Schema,
    Schemas,
    Secret,
    Select,
    StaticSource,
)

PROTOCOLS = StaticSource(
    (
        ("smtp", "SMTP"),
        ("lmtp", "LMTP"),
        ("imap", "IMAP4"),
        ("http", "HTTP"),
        ("managesieve", "ManageSieve"),
    )
)

STORE_TYPES = StaticSource(
    (
        ("rocksdb", "RocksDB"),
        ("sqlite", "SQLite"),
        ("fs", "Filesystem"),
        ("redis", "Redis"),
    )
)


def build_authentication() -> Schema:
    return (
        Schema(id="authentication", typ=List())
        .add_field(
            Field(
                id="storage.directory",
                typ=Select(source=DynamicSource(schema="directory", field="type")),
                label="Directory",
                help="The directory to use for authentication and authorization",
            )
        )
        .add_field(
            Field(
                id="authentication.fail2ban",
                typ=Rate(),
                label="Ban rate",
                help="The maximum number of failed login attempts before the IP is banned",
                default="100/1d",
            )
        )
        .add_field(
            Field(
                id="authentication.rate-limit",
                typ=Rate(),
                label="Limit rate",
                help="Amount of authentication requests that can be made in a "
                "timeframe by a given IP address",
                default="10/1m",
            )
        )
        .add_field(
            Field(
                id="authentication.fallback-admin.user",
                typ=Input(),
                label="Username",
                help="A rescue admin user can access the server in case the "
                "directory becomes unavailable",
            )
        )
        .add_field(
            Field(
                id="authentication.fallback-admin.secret",
                typ=Secret(),
                label="Password",
            )
        )
        .add_field(
            Field(
                id="authentication.master.user",
                typ=Input(),
                label="Username",
                help="The master user can access any user account using "
                "'user-login%master-user' as the login name. Leave blank to disable",
            )
        )
        .add_field(
            Field(id="authentication.master.secret", typ=Secret(), label="Password")
        )
    )


def build_oauth() -> Schema:
    schema = Schema(id="oauth", typ=List())
    schema.add_field(
        Field(id="oauth.key", typ=Secret(), label="Key", help="Encryption key to use for OAuth")
    )
    schema.add_field(
        Field(
            id="oauth.auth.max-attempts",
            typ=Input(),
            label="Max attempts",
            help="Number of failed login attempts before an authorization code is invalidated",
            default="3",
        )
    )
    for field_id, label, default in (
        ("oauth.expiry.user-code", "User code", "30m"),
        ("oauth.expiry.auth-code", "Auth code", "10m"),
        ("oauth.expiry.token", "Token", "1h"),
        ("oauth.expiry.refresh-token", "Refresh token", "30d"),
        ("oauth.expiry.refresh-token-renew", "Refresh token renew", "4d"),
    ):
        schema.add_field(Field(id=field_id, typ=Duration(), label=label, default=default))
    return schema


def build_store() -> Schema:
    return Schema(id="store", typ=Entry(prefix="store")).add_field(
        Field(id="_value", typ=Input(), label="Path")
    )


def build_listener() -> Schema:
    return (
        Schema(id="listener", typ=Record(prefix="server.listener"))
        .add_field(Field(id="protocol", typ=Select(source=PROTOCOLS), label="Protocol"))
        .add_field(Field(id="bind", typ=Array(), label="Bind addresses"))
        .add_field(
            Field(
                id="tls.implicit",
                typ=Select(source=StaticSource((("true", "Yes"), ("false", "No")))),
                label="Implicit TLS",
                default="false",
            )
        )
    )


def build_default_schemas() -> Schemas:
    return (
        Schemas()
        .add(build_authentication())
        .add(build_oauth())
        .add(build_store())
        .add(build_listener())
    )
