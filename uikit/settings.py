from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

from uikit.ui.style import Theme, ScrollbarStyle

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).resolve().parents[1] / "tally" / "config" / "defaults.yaml"

@dataclass
class WindowCfg:
    width: int = 1280
    height: int = 720
    title: str = "Tally"
    bg_rgb: tuple[int, int, int] = (17, 24, 39)

@dataclass
class ScrollCfg:
    smooth_duration: float = 0.3     # seconds for scroll_by(behavior="smooth")
    wheel_pixels: int = 40           # container wheel step

@dataclass
class AppCfg:
    fps: int = 60
    log_level: str = "INFO"
    window: WindowCfg = field(default_factory=WindowCfg)
    scroll: ScrollCfg = field(default_factory=ScrollCfg)
    theme: Theme = field(default_factory=Theme)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur

def load_defaults(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """ Raw YAML mapping; {} (with a warning) when the file is missing or malformed. """
    p = Path(path) if path else DEFAULTS_PATH
    if not p.exists():
        logger.warning("Settings file '%s' not found, using built-in defaults", p)
        return {}
    with p.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.warning("Could not parse settings '%s': %s", p, e)
            return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Settings '%s' must be a mapping, got %s", p, type(data).__name__)
        return {}
    return data

def load_settings(path: Optional[str | Path] = None) -> AppCfg:
    data = load_defaults(path)
    return AppCfg(
        fps=int(_get(data, "fps", 60)),
        log_level=str(_get(data, "logging.level", "INFO")).upper(),
        window=WindowCfg(
            width=int(_get(data, "window.width", 1280)),
            height=int(_get(data, "window.height", 720)),
            title=str(_get(data, "window.title", "Tally")),
            bg_rgb=tuple(_get(data, "window.bg_rgb", (17, 24, 39))),
        ),
        scroll=ScrollCfg(
            smooth_duration=float(_get(data, "scroll.smooth_duration", 0.3)),
            wheel_pixels=int(_get(data, "scroll.wheel_pixels", 40)),
        ),
        theme=build_theme_from_defaults(data),
    )

def build_scrollbar_style(sc: Dict[str, Any], base: Optional[ScrollbarStyle] = None) -> ScrollbarStyle:
    sb = base or ScrollbarStyle()
    track = sc.get("track_rgba", sb.track_rgba)
    return sb.derive(
        margin=int(sc.get("margin", sb.margin)),
        min_thumb_size=int(sc.get("min_thumb_size", sb.min_thumb_size)),
        track_thickness=int(sc.get("track_thickness", sb.track_thickness)),
        thickness=int(sc.get("thickness", sb.thickness)),
        inset=int(sc.get("inset", sb.inset)),
        radius=int(sc.get("radius", sb.radius)),
        track_rgba=tuple(track) if track is not None else None,
        thumb_rgb=tuple(sc.get("thumb_rgb", sb.thumb_rgb)),
        alpha_idle=int(sc.get("alpha_idle", sb.alpha_idle)),
        alpha_hover=int(sc.get("alpha_hover", sb.alpha_hover)),
        wheel_pixels=int(sc.get("wheel_pixels", sb.wheel_pixels)),
    )

def build_theme_from_defaults(defaults: Dict[str, Any]) -> Theme:
    tdata = defaults.get("theme", {}) or {}
    th = Theme()

    th.font_path     = tdata.get("font_path", th.font_path)
    th.font_size     = int(tdata.get("font_size", th.font_size))
    th.text_rgb      = tuple(tdata.get("text_rgb", th.text_rgb))
    th.muted_rgb     = tuple(tdata.get("muted_rgb", th.muted_rgb))
    th.box_bg        = tuple(tdata.get("box_bg", th.box_bg))
    th.box_border    = tuple(tdata.get("box_border", th.box_border))
    th.hover_rgba    = tuple(tdata.get("hover_rgba", th.hover_rgba))
    th.border_radius = int(tdata.get("border_radius", th.border_radius))
    th.padding       = tuple(tdata.get("padding", th.padding))
    th.row_h         = int(tdata.get("row_h", th.row_h))
    th.card_w        = int(tdata.get("card_w", th.card_w))
    th.gap           = int(tdata.get("gap", th.gap))

    st = tdata.get("statuses", {}) or {}
    for name in ("upcoming", "overdue", "completed", "deleted"):
        if name in st:
            setattr(th.statuses, name, tuple(st[name]))

    th.scrollbar = build_scrollbar_style(tdata.get("scrollbar", {}) or {})
    return th
