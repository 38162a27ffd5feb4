"""
Example 02: Fetch Modes

This example demonstrates the shapes a result can be fetched into: positional
rows, objects, key/value maps and groups.
"""

from row_shape import Engine, ConnectionConfig, FetchMode
from dataclasses import dataclass


@dataclass
class Track:
    """Track entity"""
    title: str
    seconds: int


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:")
    engine = Engine.from_config(config)

    engine.execute(
        "CREATE TABLE tracks (id INTEGER PRIMARY KEY, album TEXT, title TEXT, seconds INTEGER)"
    ).close()
    engine.atomic(
        "INSERT INTO tracks (album, title, seconds) VALUES (?, ?, ?)",
        [
            ("Blue", "All I Want", 213),
            ("Blue", "My Old Man", 215),
            ("Hejira", "Coyote", 301),
            ("Hejira", "Amelia", 361),
        ],
    )

    print("=== Fetch Modes ===\n")

    print("num:")
    print(f"   {engine.fetch_all('SELECT id, title FROM tracks', mode='num')}\n")

    print("obj with a dataclass target:")
    tracks = engine.fetch_all("SELECT title, seconds FROM tracks", mode="obj", target=Track)
    print(f"   {tracks[0]}\n")

    print("col:")
    print(f"   {engine.fetch_all('SELECT title FROM tracks', mode='col')}\n")

    print("keyPair (first column -> second column):")
    print(f"   {engine.fetch_all('SELECT id, title FROM tracks', mode='keyPair')}\n")

    print("keyPairArr (first column -> remaining columns):")
    print(f"   {engine.fetch_all('SELECT id, title, seconds FROM tracks', mode='keyPairArr')}\n")

    print("group (first column -> list of remaining columns):")
    grouped = engine.fetch_all("SELECT album, title, seconds FROM tracks", mode=FetchMode.GROUP)
    for album, rows in grouped.items():
        print(f"   {album}: {rows}")
    print()

    print("groupCol:")
    print(f"   {engine.fetch_all('SELECT album, title FROM tracks', mode='groupCol')}\n")

    print("groupObj:")
    by_album = engine.fetch_all(
        "SELECT album, title, seconds FROM tracks", mode="groupObj", target=Track
    )
    for album, album_tracks in by_album.items():
        total = sum(t.seconds for t in album_tracks)
        print(f"   {album}: {len(album_tracks)} tracks, {total}s")

    engine.close()


if __name__ == "__main__":
    main()
