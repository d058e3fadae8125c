import pytest

from repoconf.core import options
from repoconf.core.exceptions import BadArgumentError, KeyFileError, RepoFileError
from repoconf.core.repoconf import RepoConfs, RepoFile


class TestParse:
    """Test cases for loading single files into a store."""

    def test_sections_in_file_order(self, store, repos_fixture_dir):
        added = store.parse(repos_fixture_dir / "fedora.repo")

        assert [repo.id for repo in added] == ["fedora", "fedora-debuginfo"]
        assert store.repos == added
        assert len(store) == 2
        (repofile,) = store.files
        assert repofile.path == repos_fixture_dir / "fedora.repo"
        assert all(repo.file is repofile for repo in added)

    def test_files_accumulate_in_load_order(self, store, write_repo):
        store.parse(write_repo("b.repo", "[b1]\n[b2]\n"))
        store.parse(write_repo("a.repo", "[a1]\n"))

        assert [repo.id for repo in store] == ["b1", "b2", "a1"]
        assert [f.path.name for f in store.files] == ["b.repo", "a.repo"]

    def test_missing_file_leaves_store_unchanged(self, store, base_repo, temp_dir):
        with pytest.raises(RepoFileError):
            store.parse(temp_dir / "absent.repo")
        assert store.repos == [base_repo]
        assert len(store.files) == 1

    def test_malformed_file_leaves_store_unchanged(self, store, write_repo):
        with pytest.raises(KeyFileError):
            store.parse(write_repo("bad.repo", "[ok]\nname = x\ngarbage\n"))
        assert store.repos == []
        assert store.files == []

    def test_file_without_sections(self, store, write_repo):
        added = store.parse(write_repo("empty.repo", "# nothing here\n"))
        assert added == []
        assert len(store.files) == 1

    def test_duplicate_ids_across_files_coexist(self, store, write_repo):
        first = store.parse(write_repo("one.repo", "[updates]\nname = One\n"))[0]
        second = store.parse(write_repo("two.repo", "[updates]\nname = Two\n"))[0]

        assert store.find("updates") == [first, second]
        assert first.get(options.NAME) == "One"
        assert second.get(options.NAME) == "Two"

    def test_find_unknown_id(self, store, base_repo):
        assert store.find("nothing") == []

    def test_views_are_copies(self, store, base_repo):
        store.repos.clear()
        store.files.clear()
        assert store.repos == [base_repo]
        assert len(store.files) == 1


class TestRemoveFile:
    """Test cases for unloading files."""

    def test_remove_detaches_entries(self, store, write_repo):
        keep = store.parse(write_repo("keep.repo", "[keep]\n"))
        drop = store.parse(write_repo("drop.repo", "[d1]\n[d2]\n"))
        repofile = drop[0].file

        removed = store.remove_file(repofile)

        assert removed == drop
        assert store.repos == keep
        assert store.files == [keep[0].file]
        assert not any(repo.is_attached for repo in drop)
        assert keep[0].is_attached

    def test_remove_unknown_file(self, store, base_repo):
        stranger = RepoFile(base_repo.file.path, base_repo.file.keyfile)
        with pytest.raises(BadArgumentError):
            store.remove_file(stranger)
        assert base_repo.is_attached

    def test_remove_twice(self, store, base_repo):
        repofile = base_repo.file
        store.remove_file(repofile)
        with pytest.raises(BadArgumentError):
            store.remove_file(repofile)


class TestSave:
    """Test cases for writing files back."""

    def test_save_and_reload(self, store, base_repo):
        base_repo.set(options.COST, 250)
        base_repo.set(options.BASEURL, ["http://a/", "http://b/"])
        base_repo.set(options.GPGCHECK, None)

        paths = store.save()

        assert paths == [base_repo.file.path]
        reloaded = RepoConfs().parse(base_repo.file.path)[0]
        assert reloaded.get(options.COST) == 250
        assert reloaded.get(options.BASEURL) == ["http://a/", "http://b/"]
        assert reloaded.get(options.NAME) == "Base OS"
        assert not reloaded.file.keyfile.has_key("base", "gpgcheck")

    def test_save_folds_continuations(self, store, repos_fixture_dir, temp_dir):
        repo = store.parse(repos_fixture_dir / "multiline.repo")[0]
        target = repo.file.save(temp_dir / "copy.repo")

        text = target.read_text(encoding="utf-8")
        assert "baseurl = http://a.example.com/os/;http://b.example.com/os/;" in text
        assert not (temp_dir / "copy.repo.tmp").exists()
        assert RepoConfs().parse(target)[0].get(options.GPGKEY) == [
            "file:///etc/pki/key1",
            "file:///etc/pki/key2",
        ]

    def test_save_keeps_comments(self, store, write_repo):
        path = write_repo(
            "commented.repo",
            "# managed by admin\n[r]\n# mirror note\nname = R\n",
        )
        repo = store.parse(path)[0]
        repo.set(options.COST, 5)

        store.save()

        text = path.read_text(encoding="utf-8")
        assert text.startswith("# managed by admin\n[r]\n# mirror note\nname = R\n")
        reloaded = RepoConfs().parse(path)[0]
        assert reloaded.get(options.COST) == 5
        assert "# mirror note" in reloaded.file.keyfile.to_data()

    @pytest.mark.parametrize("option, value", [
        (options.NAME, "a\rb"),
        (options.NAME, "a\r\nb"),
        (options.PASSWORD, "  secret "),
        (options.PROXY, "http://proxy\t:3128"),
    ])
    def test_values_that_would_not_reload_are_rejected(self, store, base_repo,
                                                       option, value):
        with pytest.raises(BadArgumentError):
            base_repo.set(option, value)

        store.save()
        reloaded = RepoConfs().parse(base_repo.file.path)[0]
        assert reloaded.get(options.NAME) == "Base OS"

    def test_saved_text_values_reload_unchanged(self, store, base_repo):
        values = {
            options.NAME: "Base OS - updates; extra",
            options.PASSWORD: "p@ss word=1",
            options.THROTTLE: "# not a comment",
        }
        for option, value in values.items():
            base_repo.set(option, value)

        store.save()

        reloaded = RepoConfs().parse(base_repo.file.path)[0]
        for option, value in values.items():
            assert reloaded.get(option) == value

    def test_save_to_missing_directory(self, base_repo, temp_dir):
        with pytest.raises(RepoFileError) as exc_info:
            base_repo.file.save(temp_dir / "nowhere" / "x.repo")
        assert isinstance(exc_info.value.cause, OSError)
