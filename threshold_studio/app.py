from __future__ import annotations

import io
from dataclasses import asdict, fields
from html import escape
from pathlib import Path
from string import Template

from flask import Flask, jsonify, request, send_file

from .config import SETTINGS, ProcessingConfig, ServiceSettings, configure_logging
from .infrastructure.cache import CACHE, ResponseCache, cache_key, last_good_image
from .infrastructure.codec import decode_image, encode_image
from .infrastructure.formats import ImageIOError, is_format_supported
from .infrastructure.network import FETCHER, SourceError, SourceFetcher
from .infrastructure.responses import send_image
from .processing.pipeline import process_image

APP_VERSION = "1.0.0"

_FIELD_LABELS = {
    "use_binary_threshold": "Use Binary Threshold",
    "adjust_black_pixels_neighbors": "Adjust Black Pixel Neighbors",
    "use_multiple_thresholds": "Use Multiple Thresholds",
    "apply_contrast": "Apply Contrast",
    "invert_colors": "Invert Colors",
    "binary_threshold": "Binary Threshold",
    "white_threshold": "White Threshold",
    "black_threshold": "Black Threshold",
    "contrast_threshold": "Contrast Threshold",
    "multiplier": "Multiplier",
}

# Slider ranges; every other float field runs from 0 to 1.
_SLIDER_MAX = {"multiplier": "3.0"}


def _render_field(name: str, value: object, default: object) -> str:
    label = escape(_FIELD_LABELS.get(name, name))
    safe_name = escape(name)
    default_val = escape(str(default))

    if isinstance(value, bool):
        checked = "checked" if value else ""
        input_html = (
            f'<input type="checkbox" name="{safe_name}" data-field="{safe_name}" '
            f'class="toggle" {checked}>'
        )
    else:
        max_v = _SLIDER_MAX.get(name, "1.0")
        val = escape(str(value))
        input_html = (
            f'<div class="slider-group">'
            f'<input type="range" min="0" max="{max_v}" step="0.01" value="{val}" '
            f'class="slider-range" data-sync="{safe_name}">'
            f'<input type="number" name="{safe_name}" data-field="{safe_name}" value="{val}" '
            f'step="0.01" class="input slider-num">'
            f'</div>'
        )

    reset_btn = (
        f'<button type="button" class="reset-btn" data-field="{safe_name}" '
        f'data-default="{default_val}" title="Reset to {default_val}">↺</button>'
    )

    return (
        f'<div class="field">'
        f'<div class="field-header"><label class="field-label">{label}</label>{reset_btn}</div>'
        f'{input_html}'
        f'</div>'
    )


def create_app(
    settings: ServiceSettings = SETTINGS,
    fetcher: SourceFetcher | None = None,
    cache: ResponseCache | None = None,
) -> Flask:
    configure_logging(settings.log_level)
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_mb * 1024 * 1024
    app.config["PROCESSING_DEFAULTS"] = ProcessingConfig.from_env()

    source_fetcher = fetcher or FETCHER
    result_cache = cache or CACHE

    @app.route("/process", methods=["POST"])
    def process():
        defaults: ProcessingConfig = app.config["PROCESSING_DEFAULTS"]
        config, errors = defaults.with_overrides(request.values)

        fmt = (request.values.get("format") or settings.output_format).lower()
        if not is_format_supported(fmt, for_reading=False):
            errors["format"] = f"Output format '{fmt}' is not supported"

        upload = request.files.get("image")
        source_url = request.values.get("source_url")
        if upload is None and not source_url:
            errors["image"] = "Upload an image or pass source_url"

        if errors:
            return jsonify(errors=errors), 400

        if upload is not None:
            source = upload.read()
        else:
            try:
                source = source_fetcher.fetch_bytes(source_url)
            except SourceError as exc:
                cached = last_good_image()
                if cached:
                    data, mimetype = cached
                    return send_file(io.BytesIO(data), mimetype=mimetype)
                return jsonify(error=str(exc)), 502

        key = cache_key(source, config, fmt)
        data = result_cache.get(key)
        if data is None:
            try:
                data = encode_image(process_image(decode_image(source), config), fmt)
            except ImageIOError as exc:
                app.logger.warning("Rejected image: %s", exc)
                return jsonify(error=str(exc)), 400
            result_cache.put(key, data)

        return send_image(data, fmt)

    @app.route("/last")
    def last():
        cached = last_good_image()
        if not cached:
            return jsonify(error="No image has been processed yet"), 404
        data, mimetype = cached
        return send_file(io.BytesIO(data), mimetype=mimetype)

    @app.route("/health")
    def health():
        return jsonify(ok=True, version=APP_VERSION)

    @app.route("/settings", methods=["GET", "PATCH"])
    def settings_view():
        defaults: ProcessingConfig = app.config["PROCESSING_DEFAULTS"]
        if request.method == "GET":
            return jsonify(asdict(defaults))

        payload = request.get_json(silent=True) or {}
        updated, errors = defaults.with_overrides(payload)
        applied = {
            field.name: getattr(updated, field.name)
            for field in fields(updated)
            if field.name in payload and field.name not in errors
        }
        app.config["PROCESSING_DEFAULTS"] = updated

        status = 400 if errors else 200
        return (
            jsonify(updated=applied, errors=errors, settings=asdict(updated)),
            status,
        )

    @app.route("/")
    def index():
        current: ProcessingConfig = app.config["PROCESSING_DEFAULTS"]
        defaults = ProcessingConfig()

        toggles = []
        sliders = []
        for field in fields(current):
            value = getattr(current, field.name)
            html = _render_field(field.name, value, getattr(defaults, field.name))
            (toggles if isinstance(value, bool) else sliders).append(html)

        template_path = Path(__file__).parent / "templates" / "index.html"
        try:
            tmpl_str = template_path.read_text(encoding="utf-8")
        except OSError as exc:
            return f"Error loading template: {exc}", 500

        return Template(tmpl_str).substitute(
            APP_VERSION=APP_VERSION,
            effects_html="".join(toggles),
            thresholds_html="".join(sliders),
            output_format=escape(settings.output_format),
        )

    return app
