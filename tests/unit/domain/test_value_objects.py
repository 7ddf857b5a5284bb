"""Tests for repository URL parsing."""

import pytest

from playground_importer.domain.exceptions import InvalidRepositoryUrlError
from playground_importer.domain.value_objects import RepositoryReference


@pytest.mark.unit
class TestRepositoryReference:
    """Tests for RepositoryReference.from_url."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/acme/widgets",
            "https://github.com/acme/widgets.git",
            "https://www.github.com/acme/widgets",
            "http://www.github.com/acme/widgets.git",
            "github.com/acme/widgets",
            "https://github.com/acme/widgets/tree/main/src",
            "  https://github.com/acme/widgets/  ",
        ],
    )
    def test_extracts_owner_and_name(self, url: str) -> None:
        ref = RepositoryReference.from_url(url)
        assert (ref.owner, ref.name) == ("acme", "widgets")

    def test_full_name(self) -> None:
        ref = RepositoryReference.from_url("https://github.com/acme/widgets.git")
        assert ref.full_name == "acme/widgets"

    def test_keeps_dots_inside_name(self) -> None:
        ref = RepositoryReference.from_url("https://github.com/acme/widgets.js")
        assert ref.name == "widgets.js"

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "https://github.com/",
            "https://github.com/acme",
            "https://github.com/acme/",
            "https://gitlab.com/acme/widgets",
            "https://github.com/acme/.git",
            "not a url",
        ],
    )
    def test_rejects_malformed(self, url: str) -> None:
        with pytest.raises(InvalidRepositoryUrlError):
            RepositoryReference.from_url(url)
