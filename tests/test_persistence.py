from pathlib import Path

from fieldroute.persistence.archive import RouteArchive


def test_route_archive_creates_run_directory(tmp_path: Path) -> None:
    archive = RouteArchive(root=tmp_path)
    run_dir = archive.make_run_directory("tech/42")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path / "routes"
    assert run_dir.name.startswith("tech_42_")


def test_route_archive_separates_consecutive_runs(tmp_path: Path) -> None:
    archive = RouteArchive(root=tmp_path)

    first = archive.make_run_directory("tech-1")
    second = archive.make_run_directory("tech-1")

    assert first != second


def test_route_archive_writes_json_and_csv(tmp_path: Path) -> None:
    archive = RouteArchive(root=tmp_path)
    run_dir = archive.save_run("tech-1", {"hello": "world"}, "a,b\n1,2\n")

    assert (run_dir / "route.json").read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert (run_dir / "route.csv").read_text(encoding="utf-8") == "a,b\n1,2\n"
