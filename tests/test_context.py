from __future__ import annotations

from pathlib import Path

import click
import pytest

from artiformat.config import ArtiformatConfig
from artiformat.context import ArtiformatContext, pass_context


@pytest.mark.unit
class TestArtiformatContext:
    """Tests for ArtiformatContext."""

    def test_defaults(self) -> None:
        """Test a fresh context has the documented defaults."""
        ctx = ArtiformatContext()

        assert ctx.config_path is None
        assert ctx.verbose == 0
        assert ctx.color is True
        assert ctx.quiet is False
        assert ctx.config is None

    def test_attributes_are_mutable(self) -> None:
        """Test the CLI callback can fill in every slot."""
        ctx = ArtiformatContext()
        config = ArtiformatConfig(include_prefix=False)

        ctx.config_path = Path("artiformat.toml")
        ctx.verbose = 2
        ctx.quiet = True
        ctx.config = config

        assert ctx.config_path == Path("artiformat.toml")
        assert ctx.verbose == 2
        assert ctx.quiet is True
        assert ctx.config is config

    def test_slots_reject_unknown_attributes(self) -> None:
        """Test __slots__ prevents arbitrary attributes."""
        ctx = ArtiformatContext()

        with pytest.raises(AttributeError):
            ctx.arbitrary_attribute = "value"  # type: ignore


@pytest.mark.unit
class TestPassContextDecorator:
    """Tests for pass_context."""

    def test_injects_existing_context(self) -> None:
        """Test the existing context object is passed through."""

        @click.command()
        @pass_context
        def command(ctx: ArtiformatContext) -> ArtiformatContext:
            return ctx

        click_ctx = click.Context(click.Command("test"))
        artiformat_ctx = ArtiformatContext()
        click_ctx.obj = artiformat_ctx

        assert click_ctx.invoke(command) is artiformat_ctx

    def test_creates_context_when_missing(self) -> None:
        """Test a default context is created when none exists."""

        @click.command()
        @pass_context
        def command(ctx: ArtiformatContext) -> ArtiformatContext:
            return ctx

        click_ctx = click.Context(click.Command("test"))

        result = click_ctx.invoke(command)

        assert isinstance(result, ArtiformatContext)
        assert result.config is None
