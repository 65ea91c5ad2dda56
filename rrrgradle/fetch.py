"""Downloading dependency JARs and POMs from a Maven repository."""

from __future__ import annotations

import os
import sys
import threading
import urllib.error
import urllib.request
from collections import deque
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from .config import Config
from .pom import parse_pom_model

MAVEN_CENTRAL = "https://repo1.maven.org/maven2"
DEFAULT_CACHE_DIR = ".rrrgradle/cache/"
_CHUNK_SIZE = 64 * 1024


def max_concurrent_downloads() -> int:
    """Downloads are I/O bound, so allow four per CPU core."""
    return (os.cpu_count() or 1) * 4


def _coordinates(dep: str, version: str, repository: str) -> tuple[str, str, str] | None:
    parts = dep.split(":")
    if len(parts) != 2:
        return None
    group, artifact = parts
    base_url = f"{repository}/{group.replace('.', '/')}/{artifact}/{version}"
    return base_url, f"{artifact}-{version}.jar", f"{artifact}-{version}.pom"


def dep_to_url(dep: str, version: str) -> tuple[str, str, str] | None:
    """Turn ``group:artifact`` into ``(base_url, jar_name, pom_name)``, or None."""
    return _coordinates(dep, version, MAVEN_CENTRAL)


def fetch_file(url: str, path: str | Path, is_test: bool = False) -> bool:
    """Download ``url`` to ``path`` unless it is already there.

    Returns True when the file is present afterwards, False when the
    download could not be made (the problem is reported on stderr).
    """
    path = Path(path)
    kind = "test" if is_test else "main"
    if path.exists():
        print(f"✔️  Cached: {path} ({kind})", file=sys.stderr)
        return True

    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as exc:
        if exc.code == 404:
            print(f"[WARN] 404 Not Found, skipping: {url}", file=sys.stderr)
        else:
            print(f"⚠️  Failed to fetch: {url}", file=sys.stderr)
        exc.close()
        return False
    except (urllib.error.URLError, OSError, ValueError):
        print(f"⚠️  Failed to fetch: {url}", file=sys.stderr)
        return False

    with response:
        length = response.headers.get("Content-Length")
        total = int(length) if length and length.isdigit() else None
        try:
            target = path.open("wb")
        except OSError:
            print(f"⚠️  Failed to create file: {path}", file=sys.stderr)
            return False
        with target:
            downloaded = 0
            while True:
                try:
                    chunk = response.read(_CHUNK_SIZE)
                except OSError:
                    break
                if not chunk:
                    break
                try:
                    target.write(chunk)
                except OSError:
                    print(f"⚠️  Failed to write to file: {path}", file=sys.stderr)
                    return False
                downloaded += len(chunk)
                if total:
                    percent = min(100, downloaded * 100 // total)
                    print(
                        f"\rDownloading: {path.name} [{percent:3}%] ({kind})",
                        end="",
                        flush=True,
                    )
        if total is not None:
            print(f"\rDownloading: {path.name} [100%] ({kind})")
    return True


class DependencyFetcher:
    """Fetches dependencies and their transitive dependencies into a cache.

    The set of visited ``group:artifact:version`` keys is shared by every
    tree fetched through the same instance, so nothing is fetched twice.
    """

    def __init__(self, cache_dir: str | Path = DEFAULT_CACHE_DIR, max_workers: int | None = None) -> None:
        self.cache_dir = Path(cache_dir)
        self.max_workers = max_workers or max_concurrent_downloads()
        self.repository = MAVEN_CENTRAL
        self._visited: set[str] = set()
        self._lock = threading.Lock()
        self._permits = threading.BoundedSemaphore(self.max_workers)

    @property
    def visited(self) -> frozenset[str]:
        """Every key claimed so far."""
        with self._lock:
            return frozenset(self._visited)

    def _claim(self, key: str) -> bool:
        with self._lock:
            if key in self._visited:
                return False
            self._visited.add(key)
            return True

    def fetch_tree(self, dep: str, version: str, is_test: bool = False) -> list[str]:
        """Fetch ``dep`` and, breadth first, everything its POMs require.

        Test-scoped and optional dependencies are not followed. Returns the
        keys downloaded (or found cached) by this call, in order.
        """
        kind = "test" if is_test else "main"
        fetched: list[str] = []
        queue: deque[tuple[str, str]] = deque([(dep, version)])

        while queue:
            name, ver = queue.popleft()
            key = f"{name}:{ver}"
            if not self._claim(key):
                continue

            coordinates = _coordinates(name, ver, self.repository)
            if coordinates is None:
                group, sep, artifact = name.partition(":")
                if not sep:
                    group = artifact = "?"
                print(f"[DEBUG] Invalid dep_to_url for: {group}:{artifact}:{ver}", file=sys.stderr)
                continue

            base_url, jar_name, pom_name = coordinates
            jar_path = self.cache_dir / jar_name
            pom_path = self.cache_dir / pom_name
            print(f"→ Downloading {name}:{ver} ({kind})")

            with self._permits:
                with ThreadPoolExecutor(max_workers=2) as pool:
                    jobs = [
                        pool.submit(fetch_file, f"{base_url}/{jar_name}", jar_path, is_test),
                        pool.submit(fetch_file, f"{base_url}/{pom_name}", pom_path, is_test),
                    ]
                    for job in jobs:
                        job.result()
                fetched.append(key)

                if pom_path.exists():
                    model = parse_pom_model(pom_path)
                    queue.extend(
                        (f"{d.group_id}:{d.artifact_id}", d.version)
                        for d in model.dependencies
                        if d.scope != "test" and not d.optional
                    )
        return fetched


def fetch_dependencies(config: Config, cache_dir: str | Path = DEFAULT_CACHE_DIR) -> frozenset[str]:
    """Fetch main and test dependencies of ``config`` in parallel.

    Returns every ``group:artifact:version`` key that was resolved.
    """
    cache = Path(cache_dir)
    cache.mkdir(parents=True, exist_ok=True)
    fetcher = DependencyFetcher(cache)

    roots: list[tuple[str, str, bool]] = [
        (dep, version, False) for dep, version in (config.dependencies or {}).items()
    ]
    if config.test_dependencies is not None:
        print("Fetching test dependencies...")
        roots.extend((dep, version, True) for dep, version in config.test_dependencies.items())

    if roots:
        with ThreadPoolExecutor(max_workers=len(roots)) as pool:
            jobs = [pool.submit(fetcher.fetch_tree, dep, version, is_test) for dep, version, is_test in roots]
            for job in as_completed(jobs):
                job.result()

    print("✓ Dependency resolution complete.")
    return fetcher.visited