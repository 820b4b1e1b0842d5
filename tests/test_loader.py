"""Tests for the loader factory, handlers, and registration"""

import inspect
import os

import pytest

import base64load
from base64load.api import loader as loader_module
from base64load.api.loader import SIGNATURE, create_loader, register
from base64load.cache.adapter import AccessorCache, MapCache
from base64load.core.errors import (
    DuplicateSignature,
    InternalInvariantViolation,
    InvalidCache,
    InvalidHostConfig,
    MimeRequiredSync,
    NotFound,
    RemoteDisabled,
    RemoteRequiresAsync,
)
from base64load.core.options import LoadOptions
from base64load.resolve.remote import FetchResponse
from tests.conftest import PDF_BYTES, PIXEL_GIF_URI, WOFF2_BYTES, AccessorStore, RecordingFetcher, RecordingSniffer


class TestCreateLoader:
    """Factory output and option merging"""

    def test_signature(self):
        handler = create_loader()

        assert handler.signature == "base64load($source, $mimetype: null)"
        assert base64load.SIGNATURE == handler.signature

    def test_defaults_select_sync_handler(self):
        handler = create_loader()

        assert not handler.is_async
        assert not inspect.iscoroutinefunction(handler.callback)
        assert isinstance(handler.options.cache, MapCache)

    @pytest.mark.parametrize("options", [{"detect": True}, {"remote": True}])
    def test_detect_or_remote_selects_async_handler(self, options):
        handler = create_loader(options)

        assert handler.is_async
        assert inspect.iscoroutinefunction(handler.callback)

    def test_unknown_keys_are_ignored(self):
        handler = create_loader({"colour": "blue", "detect": False})

        assert not handler.is_async

    def test_non_mapping_options_use_defaults(self):
        assert not create_loader("nonsense").is_async

    def test_default_cache_is_not_shared(self):
        assert create_loader().options.cache.backend is not create_loader().options.cache.backend

    def test_explicit_none_disables_cache(self):
        assert create_loader({"cache": None}).options.cache is None

    def test_accessor_cache(self):
        assert isinstance(create_loader({"cache": AccessorStore()}).options.cache, AccessorCache)

    def test_invalid_cache(self):
        with pytest.raises(InvalidCache):
            create_loader({"cache": 5})

    def test_load_options_instance_is_used(self):
        options = LoadOptions(detect_mime=True)

        assert create_loader(options).options is options


class TestSyncHandler:
    """Sync callback behavior"""

    def test_pixel_gif_relative_to_cwd_option(self, fixtures_dir):
        handler = create_loader({"cwd": os.path.dirname(fixtures_dir)})

        assert handler.callback("./fixtures/pixel.gif", "image/gif") == PIXEL_GIF_URI

    def test_pixel_gif_relative_to_process_cwd(self, fixtures_dir, monkeypatch):
        monkeypatch.chdir(os.path.dirname(fixtures_dir))

        assert create_loader().callback("./fixtures/pixel.gif", "image/gif") == PIXEL_GIF_URI

    def test_url_requires_async_handler(self):
        with pytest.raises(RemoteRequiresAsync):
            create_loader().callback("https://example.com/a.png", "image/png")

    def test_mime_required(self, fixtures_dir):
        with pytest.raises(MimeRequiredSync):
            create_loader({"cwd": fixtures_dir}).callback("pixel.gif", None)

    def test_missing_file(self, tmp_path):
        with pytest.raises(NotFound) as exc_info:
            create_loader({"cwd": str(tmp_path)}).callback("missing.gif", "image/gif")

        assert os.path.join(str(tmp_path), "missing.gif") in str(exc_info.value)

    def test_idempotent_with_cache(self, fixtures_dir):
        cache = {}
        handler = create_loader({"cwd": fixtures_dir, "cache": cache})

        first = handler.callback("pixel.gif", "image/gif")
        second = handler.callback("pixel.gif", "image/gif")

        assert first == second == PIXEL_GIF_URI
        assert cache == {"pixel.gif": PIXEL_GIF_URI}

    def test_non_string_result_is_invariant_violation(self, monkeypatch):
        handler = create_loader()
        monkeypatch.setattr(loader_module.SyncEncoder, "encode", lambda self, source, mime: b"bytes")

        with pytest.raises(InternalInvariantViolation) as exc_info:
            handler.callback("a.png", "image/png")

        assert "base64load(a.png,image/png)" in str(exc_info.value)


class TestAsyncHandler:
    """Async callback behavior"""

    @pytest.mark.asyncio
    async def test_sync_and_async_outputs_match(self, fixtures_dir):
        sync_output = create_loader({"cwd": fixtures_dir}).callback("pixel.gif", "image/gif")
        async_output = await create_loader({"cwd": fixtures_dir, "detect": True}).callback("pixel.gif", "image/gif")

        assert async_output == sync_output

    @pytest.mark.asyncio
    async def test_detect_with_pillow(self, fixtures_dir):
        handler = create_loader({"cwd": fixtures_dir, "detect": True})

        assert await handler.callback("pixel.gif", None) == PIXEL_GIF_URI

    @pytest.mark.asyncio
    async def test_supplied_mime_skips_detector(self, fixtures_dir):
        sniffer = RecordingSniffer(from_bytes="image/png")
        handler = create_loader({"cwd": fixtures_dir, "detect": True, "sniffer": sniffer})

        assert await handler.callback("pixel.gif", "image/gif") == PIXEL_GIF_URI
        assert sniffer.calls == []

    @pytest.mark.asyncio
    async def test_url_with_remote_disabled(self, png_response):
        fetcher = RecordingFetcher(response=png_response)
        handler = create_loader({"detect": True, "remote": False, "fetcher": fetcher})

        with pytest.raises(RemoteDisabled):
            await handler.callback("https://example.com/a.png", None)

        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_remote_fetch(self, png_response):
        fetcher = RecordingFetcher(response=png_response)
        handler = create_loader({"remote": True, "fetcher": fetcher})

        output = await handler.callback("https://example.com/a.png")

        assert output.startswith('"data:image/png;base64,')
        assert fetcher.calls == ["https://example.com/a.png"]

    @pytest.mark.asyncio
    async def test_remote_font_without_content_type(self):
        fetcher = RecordingFetcher(response=FetchResponse(200, "OK", WOFF2_BYTES, None))
        handler = create_loader({"remote": True, "detect": True, "fetcher": fetcher})

        output = await handler.callback("https://cdn.example.com/f")

        assert output.startswith('"data:')
        assert "woff" in output.split(";", 1)[0]

    @pytest.mark.asyncio
    async def test_extensionless_local_file(self, tmp_path):
        (tmp_path / "logo").write_bytes(PDF_BYTES)
        handler = create_loader({"cwd": str(tmp_path), "detect": True})

        output = await handler.callback("logo")

        assert output.startswith('"data:application/pdf;base64,')


class TestRegistration:
    """Host configuration side effects"""

    def test_creates_function_table(self):
        host_config = {}
        handler = create_loader(None, host_config)

        assert host_config == {"functions": {SIGNATURE: handler.callback}}

    def test_keeps_existing_functions(self):
        other = object()
        host_config = {"functions": {"other()": other}, "output_style": "compressed"}

        create_loader(None, host_config)

        assert host_config["functions"]["other()"] is other
        assert SIGNATURE in host_config["functions"]
        assert host_config["output_style"] == "compressed"

    def test_replaces_non_mapping_functions_entry(self):
        host_config = {"functions": None}

        create_loader(None, host_config)

        assert SIGNATURE in host_config["functions"]

    def test_duplicate_signature(self):
        host_config = {}
        create_loader(None, host_config)
        first = host_config["functions"][SIGNATURE]

        with pytest.raises(DuplicateSignature):
            create_loader(None, host_config)

        assert host_config["functions"][SIGNATURE] is first

    @pytest.mark.parametrize("host_config", ["options", 3, ["functions"]])
    def test_invalid_host_config(self, host_config):
        with pytest.raises(InvalidHostConfig):
            create_loader(None, host_config)

    def test_register_directly(self):
        host_config = {}
        register(host_config, "f($x)", print)

        assert host_config["functions"]["f($x)"] is print
