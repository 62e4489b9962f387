#!/usr/bin/env python3
"""Generate a bearer token for the docker-code-mcp HTTP transport.

The token goes into MCP_AUTH_TOKEN on the server and into the client's
Authorization header.
"""

# ruff: noqa: T201

import secrets


def generate_auth_token() -> str:
    """Return a URL-safe token carrying 32 random bytes (43 characters)."""
    return secrets.token_urlsafe(32)


def main() -> None:
    token = generate_auth_token()
    print("Generated auth token:")
    print("=" * 60)
    print(token)
    print("=" * 60)
    print()
    print("Server:")
    print(f"  export MCP_AUTH_TOKEN={token}")
    print()
    print("Client header:")
    print(f"  Authorization: Bearer {token}")
    print()
    print("Keep this token out of version control.")


if __name__ == "__main__":
    main()
