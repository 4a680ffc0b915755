"""Unit tests for the infocanvas CLI."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner, Result

from infocanvas.cli import cli
from infocanvas.cli.handlers import map_exception_to_exit, run_with_error_handling
from infocanvas.cli.utils import parse_region
from infocanvas.core.config import Config
from infocanvas.core.references import ReferenceImage
from infocanvas.core.selection import SelectionRegion
from infocanvas.utils.exceptions import (
    APIError,
    ConfigurationError,
    GenerationInProgressError,
    NoImageInResponseError,
    ValidationError,
)


def _run_cli(*args: str) -> Result:
    """Invoke infocanvas generate with given args; returns Click's Result."""
    runner = CliRunner()
    return runner.invoke(cli, ["generate", *args])


def _mock_studio(tmp_path: Path) -> MagicMock:
    studio = MagicMock()
    studio.generate = AsyncMock()
    studio.edit = AsyncMock()
    studio.export.return_value = tmp_path / "infographic-abc.png"
    return studio


@pytest.mark.unit
class TestGenerateCommand:
    """Test generate command behavior and exit codes."""

    def test_required_prompt(self):
        result = _run_cli()
        assert result.exit_code != 0
        assert "prompt" in result.output.lower() or "Missing" in result.output

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_success_prints_path(self, mock_config_cls, mock_studio_cls, tmp_path):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        studio = _mock_studio(tmp_path)
        mock_studio_cls.return_value = studio

        result = _run_cli("--prompt", "Benefits of drinking water", "-q", "-o", str(tmp_path))

        assert result.exit_code == 0, result.output
        assert str(tmp_path / "infographic-abc.png") in result.output
        studio.generate.assert_awaited_once_with("Benefits of drinking water")
        studio.edit.assert_not_awaited()
        studio.export.assert_called_once_with(tmp_path)

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_ratio_and_edits_in_order(self, mock_config_cls, mock_studio_cls, tmp_path):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        studio = _mock_studio(tmp_path)
        mock_studio_cls.return_value = studio

        result = _run_cli(
            "-p", "Coffee", "--ratio", "1:1", "-e", "make it blue", "-e", "add icons", "-q"
        )

        assert result.exit_code == 0, result.output
        studio.set_aspect_ratio.assert_called_once_with("1:1")
        assert [c.args[0] for c in studio.edit.await_args_list] == ["make it blue", "add icons"]
        studio.show_selection.assert_not_called()

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_region_shown_before_each_edit(self, mock_config_cls, mock_studio_cls, tmp_path):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        studio = _mock_studio(tmp_path)
        mock_studio_cls.return_value = studio

        result = _run_cli(
            "-p", "Coffee", "-e", "a", "-e", "b", "--region", "20,30,40,10", "-q"
        )

        assert result.exit_code == 0, result.output
        assert studio.show_selection.call_count == 2
        studio.show_selection.assert_called_with(SelectionRegion(x=20, y=30, w=40, h=10))

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_bad_region_exit_2(self, mock_config_cls, mock_studio_cls, tmp_path):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        mock_studio_cls.return_value = _mock_studio(tmp_path)

        result = _run_cli("-p", "Coffee", "-e", "a", "--region", "1,2,3", "-q")

        assert result.exit_code == 2
        assert "region" in result.output.lower()

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_references_loaded(self, mock_config_cls, mock_studio_cls, tmp_path, png_bytes):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        studio = _mock_studio(tmp_path)
        mock_studio_cls.return_value = studio
        ref = tmp_path / "ref.png"
        ref.write_bytes(png_bytes)

        result = _run_cli("-p", "Coffee", "-r", str(ref), "-q")

        assert result.exit_code == 0, result.output
        studio.add_reference.assert_called_once_with(
            ReferenceImage(data=png_bytes, mime_type="image/png")
        )

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_overrides_applied_to_config(self, mock_config_cls, mock_studio_cls, tmp_path):
        config = Config()
        mock_config_cls.from_env.return_value = config
        mock_studio_cls.return_value = _mock_studio(tmp_path)

        result = _run_cli(
            "-p", "Coffee",
            "--provider", "openrouter",
            "--api-key", "sk-cli",
            "--model", "custom/model",
            "--image-size", "2K",
            "-q",
        )

        assert result.exit_code == 0, result.output
        assert mock_studio_cls.call_args.kwargs["config"] is config
        assert config.provider == "openrouter"
        assert config.openrouter_api_key == "sk-cli"
        assert config.image_model == "custom/model"
        assert config.image_size == "2K"

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_validation_error_exit_2(self, mock_config_cls, mock_studio_cls, tmp_path):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        studio = _mock_studio(tmp_path)
        studio.generate.side_effect = ValidationError("Prompt cannot be empty", field="prompt")
        mock_studio_cls.return_value = studio

        result = _run_cli("-p", " ", "-q")

        assert result.exit_code == 2
        assert "Prompt cannot be empty" in result.output

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_api_error_exit_1(self, mock_config_cls, mock_studio_cls, tmp_path):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        studio = _mock_studio(tmp_path)
        studio.generate.side_effect = APIError("Rate limit exceeded.", status_code=429)
        mock_studio_cls.return_value = studio

        result = _run_cli("-p", "Coffee", "-q")

        assert result.exit_code == 1
        assert "Failed to generate image. Rate limit exceeded." in result.output
        studio.export.assert_not_called()

    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_invalid_config_exit_2(self, mock_config_cls, mock_studio_cls, tmp_path):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key", image_size="9K")
        mock_studio_cls.return_value = _mock_studio(tmp_path)

        result = _run_cli("-p", "Coffee", "-q")

        assert result.exit_code == 2
        mock_studio_cls.assert_not_called()

    @patch("infocanvas.cli.progress.print_session_result")
    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_not_quiet_prints_summary(
        self, mock_config_cls, mock_studio_cls, mock_print_result, tmp_path
    ):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        studio = _mock_studio(tmp_path)
        mock_studio_cls.return_value = studio

        result = _run_cli("-p", "Coffee")

        assert result.exit_code == 0, result.output
        mock_print_result.assert_called_once()
        assert mock_print_result.call_args.args[0] is studio

    @patch("infocanvas.cli.progress.print_warning")
    @patch("infocanvas.cli.progress.print_session_result")
    @patch("infocanvas.cli.commands.CanvasStudio")
    @patch("infocanvas.cli.commands.Config")
    def test_region_without_edit_warns(
        self, mock_config_cls, mock_studio_cls, _mock_print_result, mock_warning, tmp_path
    ):
        mock_config_cls.from_env.return_value = Config(gemini_api_key="g-key")
        studio = _mock_studio(tmp_path)
        mock_studio_cls.return_value = studio

        result = _run_cli("-p", "Coffee", "--region", "10,10,20,20")

        assert result.exit_code == 0, result.output
        mock_warning.assert_called_once()
        studio.show_selection.assert_not_called()


@pytest.mark.unit
class TestFormatsCommand:
    def test_lists_all_ratios(self):
        result = CliRunner().invoke(cli, ["formats"])
        assert result.exit_code == 0
        for label in ("1080 x 1920 px", "1080 x 1080 px", "1920 x 1080 px", "1080 x 1350 px"):
            assert label in result.output


@pytest.mark.unit
class TestHelpers:
    def test_parse_region(self):
        assert parse_region("20, 30,40,10") == (20.0, 30.0, 40.0, 10.0)

    @pytest.mark.parametrize("value", ["1,2,3", "a,b,c,d", ""])
    def test_parse_region_invalid(self, value):
        import click

        with pytest.raises(click.BadParameter):
            parse_region(value)

    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (ValidationError("bad"), 2),
            (ConfigurationError("no key"), 2),
            (APIError("down"), 1),
            (NoImageInResponseError("none"), 1),
            (GenerationInProgressError("busy"), 1),
            (RuntimeError("boom"), 1),
        ],
    )
    def test_exit_codes(self, exc, code):
        assert map_exception_to_exit(exc)[0] == code

    def test_transport_prefix_not_doubled(self):
        from infocanvas.utils.exceptions import TransportError

        _, msg = map_exception_to_exit(TransportError("Failed to generate image. boom"))
        assert msg == "Failed to generate image. boom"
        _, msg = map_exception_to_exit(APIError("Rate limit exceeded."))
        assert msg == "Failed to generate image. Rate limit exceeded."

    @patch("infocanvas.cli.handlers.logger")
    def test_run_with_error_handling_exit_codes(self, mock_logger, capsys):
        def fail_validation():
            raise ValidationError("Prompt cannot be empty", field="prompt")

        with pytest.raises(SystemExit) as exc_info:
            run_with_error_handling(fail_validation, quiet=True)
        assert exc_info.value.code == 2
        assert "Prompt cannot be empty" in capsys.readouterr().err
        mock_logger.exception.assert_not_called()

        def crash():
            raise RuntimeError("boom")

        with pytest.raises(SystemExit) as exc_info:
            run_with_error_handling(crash, quiet=True)
        assert exc_info.value.code == 1
        assert "boom" in capsys.readouterr().err
        mock_logger.exception.assert_called_once()
