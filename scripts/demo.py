#!/usr/bin/env python3
"""
Demo script for the OSM gateway.

Runs the same coordinate search twice against the live Overpass API to
show the cache at work, then looks up a single element on the OSM API.
"""

import asyncio
import sys
import time

from osm_gateway.entities import ElementKind
from osm_gateway.errors import UpstreamError
from osm_gateway.repositories import FileCacheRepository, OverpassHttpClient
from osm_gateway.services import QueryCacheCoordinator, SearchService

# Louvre Abu Dhabi
DEFAULT_LAT = 24.5337
DEFAULT_LON = 54.3982


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_search(service: SearchService, lat: float, lon: float) -> None:
    """Search twice and compare timings."""
    print_section(f"Search around ({lat}, {lon})")

    for attempt in ("cold", "warm"):
        start = time.time()
        pois = await service.search(lat, lon)
        duration = (time.time() - start) * 1000
        print(f"\n  {attempt}: {len(pois)} POIs in {duration:.1f}ms")
        for poi in pois:
            print(f"    - {poi['name'] or '(unnamed)'} [{poi['cat']}] {poi['type']}/{poi['id']}")
            if poi["wiki"]:
                print(f"      wiki: {poi['wiki']}")
            if poi["website"]:
                print(f"      web:  {poi['website']}")
        await service.coordinator.drain()

    stats = await service.coordinator.get_stats()
    print(f"\n  cache: {stats['hits']} hits, {stats['misses']} misses, {stats['total_entries']} entries")


async def demo_element(service: SearchService, element_id: int) -> None:
    """Look up one node on the OSM API."""
    print_section(f"Node {element_id}")

    element = await service.get_element(ElementKind.NODE, element_id)
    if element is None:
        print("  not found")
    else:
        print(f"  tags: {element.get('tags', {})}")


async def main() -> int:
    lat = float(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_LAT
    lon = float(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_LON

    fetcher = OverpassHttpClient.create()
    service = SearchService.create(
        coordinator=QueryCacheCoordinator(FileCacheRepository.create()),
        fetcher=fetcher,
    )
    try:
        await demo_search(service, lat, lon)
        await demo_element(service, 1)
    except UpstreamError as e:
        print(f"\n  upstream failed: {e}")
        return 1
    finally:
        await service.coordinator.drain()
        await service.coordinator.store.close()
        await fetcher.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
