from pathlib import Path

from artifactory_action.modules.artifactdeploy.service import PathNormalizer, canonical_path


def test_timestamped_snapshot_is_rewritten():
    path = "/com/example/foo/1.0.0-SNAPSHOT/foo-1.0.0-20240305.110926-1.jar"

    assert canonical_path(path) == "/com/example/foo/1.0.0-SNAPSHOT/foo-1.0.0-SNAPSHOT.jar"


def test_release_and_unparseable_paths_are_unchanged():
    assert canonical_path("/com/example/foo/1.0.0/foo-1.0.0.jar") == "/com/example/foo/1.0.0/foo-1.0.0.jar"
    assert canonical_path("/readme.txt") == "/readme.txt"


def test_duplicates_keep_first_seen():
    first = Path("first.jar")
    second = Path("second.jar")
    files = [
        (first, "/com/example/foo/1.0.0-SNAPSHOT/foo-1.0.0-20240305.110926-1.jar"),
        (second, "/com/example/foo/1.0.0-SNAPSHOT/foo-1.0.0-20240305.110926-2.jar"),
    ]

    retained = PathNormalizer().normalize(files)

    assert len(retained) == 1
    assert retained[0].file == first
    assert retained[0].original_path.endswith("-1.jar")
    assert retained[0].canonical_path == "/com/example/foo/1.0.0-SNAPSHOT/foo-1.0.0-SNAPSHOT.jar"


def test_accept_rejects_seen_canonical_path():
    normalizer = PathNormalizer()

    assert normalizer.accept("/com/example/foo/1.0.0/foo-1.0.0.jar") == "/com/example/foo/1.0.0/foo-1.0.0.jar"
    assert normalizer.accept("/com/example/foo/1.0.0/foo-1.0.0.jar") is None
    assert normalizer.accept("/com/example/foo/1.0.0/foo-1.0.0.pom") is not None


def test_timestamped_signatures_collapse_to_one_snapshot_path():
    files = [
        (Path("one.asc"), "/com/example/foo/1.0.0-SNAPSHOT/foo-1.0.0-20240305.110926-1.jar.asc"),
        (Path("two.asc"), "/com/example/foo/1.0.0-SNAPSHOT/foo-1.0.0-20240305.110926-2.jar.asc"),
    ]

    retained = PathNormalizer().normalize(files)

    assert [normalized.canonical_path for normalized in retained] == [
        "/com/example/foo/1.0.0-SNAPSHOT/foo-1.0.0-SNAPSHOT.jar.asc"
    ]
