"""Tests for linker module."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from dotstrap.filesystem import RealFileSystem
from dotstrap.linker import Linker, LinkSpec, LinkStatus

STAMP = "20240501123045"


@pytest.fixture
def linker(fs: RealFileSystem) -> Linker:
    """Linker with a fixed clock."""
    return Linker(fs, clock=lambda: datetime(2024, 5, 1, 12, 30, 45))


@pytest.fixture
def package(tmp_path: Path) -> Path:
    """Package with two files and a nested config directory."""
    pkg = tmp_path / "dotfiles" / "bash"
    pkg.mkdir(parents=True)
    (pkg / ".bashrc").write_text("# bashrc\n")
    (pkg / ".inputrc").write_text("# inputrc\n")
    (pkg / ".config" / "app").mkdir(parents=True)
    (pkg / ".config" / "app" / "settings.toml").write_text("x = 1\n")
    (pkg / "README.md").write_text("readme\n")
    return pkg


@pytest.fixture
def target_root(tmp_path: Path) -> Path:
    root = tmp_path / "home"
    root.mkdir()
    return root


def _spec(package: Path, target_root: Path) -> LinkSpec:
    return LinkSpec.from_package(package.parent, package.name, target_root, RealFileSystem())


class TestLinkSpec:
    """Tests for LinkSpec target computation."""

    def test_top_level_entries_become_targets(self, package: Path, target_root: Path) -> None:
        """Test every package entry maps to the same name under the root."""
        spec = _spec(package, target_root)
        assert spec.target_paths == frozenset(
            {target_root / ".bashrc", target_root / ".inputrc", target_root / ".config"}
        )

    def test_ignores_readme(self, package: Path, target_root: Path) -> None:
        """Test README files are never linked."""
        spec = _spec(package, target_root)
        assert target_root / "README.md" not in spec.target_paths

    def test_descends_into_existing_real_directory(self, package: Path, target_root: Path) -> None:
        """Test a real target directory is not replaced by a folded link."""
        (target_root / ".config").mkdir()
        spec = _spec(package, target_root)
        assert target_root / ".config" / "app" in spec.target_paths
        assert target_root / ".config" not in spec.target_paths

    def test_source_for(self, package: Path, target_root: Path) -> None:
        """Test mapping a target back to its source."""
        spec = _spec(package, target_root)
        assert spec.source_for(target_root / ".bashrc") == package / ".bashrc"

    def test_missing_package_raises(self, tmp_path: Path, target_root: Path) -> None:
        """Test a missing package directory is reported."""
        with pytest.raises(FileNotFoundError, match="Package not found"):
            LinkSpec.from_package(tmp_path, "nope", target_root, RealFileSystem())


class TestLink:
    """Tests for Linker.link."""

    def test_links_fresh_targets(self, linker: Linker, package: Path, target_root: Path) -> None:
        """Test all targets become symlinks to their sources."""
        report = linker.link(_spec(package, target_root))

        assert report.ok
        assert all(r.status is LinkStatus.LINKED for r in report.results)
        assert (target_root / ".bashrc").is_symlink()
        assert (target_root / ".bashrc").read_text() == "# bashrc\n"

    def test_second_link_is_noop(self, linker: Linker, package: Path, target_root: Path) -> None:
        """Test linking twice leaves everything as already linked."""
        spec = _spec(package, target_root)
        linker.link(spec)
        report = linker.link(spec)

        assert all(r.status is LinkStatus.ALREADY_LINKED for r in report.results)
        assert linker.is_linked(spec)

    def test_conflict_is_isolated(self, linker: Linker, package: Path, target_root: Path) -> None:
        """Test a conflicting file is backed up and other targets still link."""
        (target_root / ".bashrc").write_text("user data\n")

        report = linker.link(_spec(package, target_root))

        backup = target_root / f".bashrc.bak.{STAMP}"
        assert backup.read_text() == "user data\n"
        assert (target_root / ".bashrc").is_symlink()
        assert (target_root / ".inputrc").is_symlink()
        assert [r.target for r in report.conflicts] == [target_root / ".bashrc"]
        assert report.conflicts[0].backup == backup
        assert report.ok

    def test_backup_name_gets_counter_when_taken(
        self, linker: Linker, package: Path, target_root: Path
    ) -> None:
        """Test an existing backup is never overwritten."""
        (target_root / f".bashrc.bak.{STAMP}").write_text("older backup\n")
        (target_root / ".bashrc").write_text("user data\n")

        linker.link(_spec(package, target_root))

        assert (target_root / f".bashrc.bak.{STAMP}").read_text() == "older backup\n"
        assert (target_root / f".bashrc.bak.{STAMP}.1").read_text() == "user data\n"

    def test_force_still_backs_up_user_files(
        self, linker: Linker, package: Path, target_root: Path
    ) -> None:
        """Test force never deletes files the tool does not own."""
        (target_root / ".bashrc").write_text("user data\n")

        report = linker.link(_spec(package, target_root), force=True)

        assert (target_root / f".bashrc.bak.{STAMP}").read_text() == "user data\n"
        assert report.conflicts

    def test_force_replaces_managed_path(
        self, linker: Linker, package: Path, target_root: Path
    ) -> None:
        """Test force deletes a registered managed directory outright."""
        managed = target_root / ".config"
        (managed / "stale").mkdir(parents=True)
        linker.register_managed(managed)
        spec = LinkSpec(
            package_name="bash",
            source_dir=package,
            target_root=target_root,
            target_paths=frozenset({managed}),
        )

        report = linker.link(spec, force=True)

        assert report.results[0].status is LinkStatus.REPLACED
        assert managed.is_symlink()
        assert not list(target_root.glob(".config.bak.*"))

    def test_wrong_symlink_is_backed_up(
        self, linker: Linker, package: Path, target_root: Path, tmp_path: Path
    ) -> None:
        """Test a symlink pointing elsewhere is treated as a conflict."""
        elsewhere = tmp_path / "elsewhere"
        elsewhere.write_text("x\n")
        (target_root / ".inputrc").symlink_to(elsewhere)

        report = linker.link(_spec(package, target_root))

        assert (target_root / f".inputrc.bak.{STAMP}").is_symlink()
        assert linker.points_to(target_root / ".inputrc", package / ".inputrc")
        assert report.ok

    def test_failure_on_one_target_does_not_block_others(
        self, package: Path, target_root: Path
    ) -> None:
        """Test an OSError is recorded per target."""
        real = RealFileSystem()
        fs = MagicMock(wraps=real)

        def symlink(target: Path, link: Path) -> None:
            if link.name == ".bashrc":
                raise PermissionError("denied")
            real.symlink(target, link)

        fs.symlink.side_effect = symlink
        linker = Linker(fs)

        report = linker.link(_spec(package, target_root))

        assert [r.target.name for r in report.failures] == [".bashrc"]
        assert "denied" in report.failures[0].error
        assert (target_root / ".inputrc").is_symlink()
        assert not report.ok


class TestSharedParent:
    """Tests for packages that both provide a directory missing from the root."""

    @pytest.fixture
    def repo(self, tmp_path: Path) -> Path:
        """Repository with two packages sharing .config."""
        repo = tmp_path / "dotfiles"
        (repo / "nvim" / ".config" / "nvim").mkdir(parents=True)
        (repo / "nvim" / ".config" / "nvim" / "init.lua").write_text("-- init\n")
        (repo / "wezterm" / ".config" / "wezterm").mkdir(parents=True)
        (repo / "wezterm" / ".config" / "wezterm" / "wezterm.lua").write_text("-- wez\n")
        return repo

    def _link_all(self, linker: Linker, repo: Path, target_root: Path) -> dict[str, LinkSpec]:
        specs = {}
        for name in ["nvim", "wezterm"]:
            specs[name] = LinkSpec.from_package(repo, name, target_root, RealFileSystem())
            linker.link(specs[name])
        return specs

    def test_second_package_unfolds_first(
        self, linker: Linker, repo: Path, target_root: Path
    ) -> None:
        """Test a folded parent is split into per-entry links, not backed up."""
        self._link_all(linker, repo, target_root)

        config = target_root / ".config"
        assert config.is_dir() and not config.is_symlink()
        assert linker.points_to(config / "nvim", repo / "nvim" / ".config" / "nvim")
        assert linker.points_to(config / "wezterm", repo / "wezterm" / ".config" / "wezterm")
        assert not list(target_root.glob("*.bak.*"))
        assert (config / "nvim" / "init.lua").read_text() == "-- init\n"

    def test_relinking_is_noop(self, linker: Linker, repo: Path, target_root: Path) -> None:
        """Test both packages report linked and a second pass changes nothing."""
        self._link_all(linker, repo, target_root)

        for name in ["nvim", "wezterm"]:
            spec = LinkSpec.from_package(repo, name, target_root, RealFileSystem())
            assert linker.is_linked(spec)
            report = linker.link(spec)
            assert all(r.status is LinkStatus.ALREADY_LINKED for r in report.results)
        assert sorted(p.name for p in (target_root / ".config").iterdir()) == ["nvim", "wezterm"]

    def test_own_fold_is_not_descended(
        self, linker: Linker, repo: Path, target_root: Path
    ) -> None:
        """Test a package's own folded link stays a single target."""
        spec = LinkSpec.from_package(repo, "nvim", target_root, RealFileSystem())
        linker.link(spec)

        again = LinkSpec.from_package(repo, "nvim", target_root, RealFileSystem())

        assert again.target_paths == frozenset({target_root / ".config"})

    def test_foreign_symlink_is_not_unfolded(
        self, linker: Linker, repo: Path, target_root: Path, tmp_path: Path
    ) -> None:
        """Test a user's own directory link outside the repository is backed up."""
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        (target_root / ".config").symlink_to(elsewhere)

        report = linker.link(LinkSpec.from_package(repo, "nvim", target_root, RealFileSystem()))

        assert [r.target for r in report.conflicts] == [target_root / ".config"]
        assert (target_root / f".config.bak.{STAMP}").resolve() == elsewhere.resolve()


class TestPrepareDestination:
    """Tests for Linker.prepare_destination."""

    def test_missing_path(self, linker: Linker, target_root: Path) -> None:
        """Test nothing happens when the path does not exist."""
        assert linker.prepare_destination(target_root / ".tmux", force=False) is None

    def test_backs_up_without_force(self, linker: Linker, target_root: Path) -> None:
        """Test an existing managed directory is backed up without force."""
        path = target_root / ".tmux"
        path.mkdir()
        linker.register_managed(path)

        backup = linker.prepare_destination(path, force=False)

        assert backup == target_root / f".tmux.bak.{STAMP}"
        assert backup.is_dir()
        assert not path.exists()

    def test_deletes_managed_with_force(self, linker: Linker, target_root: Path) -> None:
        """Test force deletes a managed directory."""
        path = target_root / ".tmux"
        path.mkdir()
        linker.register_managed(path)

        assert linker.prepare_destination(path, force=True) is None
        assert not path.exists()
        assert not list(target_root.iterdir())

    def test_unmanaged_backed_up_with_force(self, linker: Linker, target_root: Path) -> None:
        """Test force still backs up paths the tool does not own."""
        path = target_root / ".emacs.d"
        path.mkdir()

        backup = linker.prepare_destination(path, force=True)

        assert backup is not None and backup.is_dir()


class TestUnlink:
    """Tests for Linker.unlink."""

    def test_removes_only_own_links(
        self, linker: Linker, package: Path, target_root: Path
    ) -> None:
        """Test unlink leaves regular files and foreign links alone."""
        spec = _spec(package, target_root)
        linker.link(spec)
        (target_root / ".inputrc").unlink()
        (target_root / ".inputrc").write_text("user file\n")

        report = linker.unlink(spec)

        assert {r.target.name for r in report.results} == {".bashrc", ".config"}
        assert all(r.status is LinkStatus.UNLINKED for r in report.results)
        assert not (target_root / ".bashrc").exists()
        assert (target_root / ".inputrc").read_text() == "user file\n"
        assert (package / ".bashrc").exists()

    def test_unlink_nothing_linked(
        self, linker: Linker, package: Path, target_root: Path
    ) -> None:
        """Test unlink with no links is an empty success."""
        report = linker.unlink(_spec(package, target_root))
        assert report.results == []
        assert report.ok
