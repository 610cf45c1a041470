#!/usr/bin/env python3
"""
Demo script for the normalized cache.

Simulates a small user API and shows request hits, entity eviction,
list bodies, the fetch_by_id shortcut and rule bypass.
"""

import asyncio

from normalized_cache import CachePolicy, FetchOptions, NormalizedCache

USERS = {
    1: {"id": 1, "name": "Ayu"},
    2: {"id": 2, "name": "Budi"},
    3: {"id": 3, "name": "Citra"},
}

calls = {"get_user": 0, "list_users": 0}


async def get_user(params: dict) -> dict:
    calls["get_user"] += 1
    await asyncio.sleep(0.05)  # pretend network
    return {"body": {"user": dict(USERS[params["id"]])}, "headers": {"etag": f"u{params['id']}"}}


async def list_users(params: dict) -> dict:
    calls["list_users"] += 1
    await asyncio.sleep(0.05)
    return {"body": {"user": [dict(u) for u in USERS.values()]}}


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_basic_hit(cache: NormalizedCache) -> None:
    print_section("Request hit")

    await cache.fetch(get_user, {"id": 1})
    await cache.drain()
    response = await cache.fetch(get_user, {"id": 1})

    print(f"  Response: {response}")
    print(f"  get_user called {calls['get_user']} time(s)")


async def demo_eviction(cache: NormalizedCache) -> None:
    print_section("Entity eviction forces a refetch")

    cache.delete_data("user", 1)
    await cache.fetch(get_user, {"id": 1})
    print(f"  get_user called {calls['get_user']} time(s)")


async def demo_list_and_by_id(cache: NormalizedCache) -> None:
    print_section("List bodies and fetch_by_id")

    await cache.fetch(list_users, {"page": 1})
    await cache.drain()
    print(f"  Body: {cache.peek_body('list_users', {'page': 1})}")

    user = await cache.fetch_by_id("user", 3, get_user, {"id": 3})
    print(f"  fetch_by_id: {user}")
    print(f"  get_user called {calls['get_user']} time(s)")


async def demo_rules(cache: NormalizedCache) -> None:
    print_section("Rule bypass")

    fresh = FetchOptions(rules=[lambda params: not params.get("fresh")])
    await cache.fetch(get_user, {"id": 2, "fresh": True}, fresh)
    await cache.fetch(get_user, {"id": 2, "fresh": True}, fresh)
    print(f"  get_user called {calls['get_user']} time(s)")


async def main() -> None:
    """Run all demos."""
    print("\n🚀 Normalized Cache Demo")

    cache = NormalizedCache(
        default_data_cache=CachePolicy(max_entries=100),
        default_request_options=FetchOptions(cache=CachePolicy(max_entries=50)),
    )

    await demo_basic_hit(cache)
    await demo_eviction(cache)
    await demo_list_and_by_id(cache)
    await demo_rules(cache)
    await cache.drain()

    print_section("Stats")
    print(f"  {cache.stats()}")
    print("\n✅ Demo completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
