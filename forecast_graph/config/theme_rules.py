"""Selector → theme-role table for recoloring provider graphs.

Selectors are tied to the upstream provider's markup (hex literals and logo
offsets). When the provider changes its markup a selector silently stops
matching; nothing reports the miss, so update this table when graphs stop
picking up theme colors.

Declaration values are ``str.format`` templates over ``WidgetConfig`` fields.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeRule:
    """One block of selectors sharing the same declarations."""

    selectors: tuple[str, ...]
    declarations: tuple[tuple[str, str], ...]
    # Nest under ".{scope} .svg-image-container svg" (True) or just ".{scope}".
    in_svg: bool = True


THEME_RULES: tuple[ThemeRule, ...] = (
    # Text
    ThemeRule(
        selectors=(".location-header", ".day-label", ".served-by-header", ".legend-label", "text"),
        declarations=(("fill", "{main_text_color}"),),
    ),
    ThemeRule(
        selectors=(".hour-label", ".y-axis-label"),
        declarations=(("fill", "{secondary_text_color}"),),
    ),
    # Axis icons
    ThemeRule(
        selectors=('g[filter*="invert"]',),
        declarations=(("filter", "none"),),
    ),
    ThemeRule(
        selectors=(
            '[fill="#56616c"]',
            '[stroke="#56616c"]',
            '[style*="fill:#56616c"]',
            '[style*="stroke:#56616c"]',
            '[style*="rgb(86,97,108)"]',
        ),
        declarations=(("fill", "{y_axis_icon_color}"), ("stroke", "{y_axis_icon_color}")),
    ),
    ThemeRule(
        selectors=('[stroke="currentColor"]',),
        declarations=(("stroke", "{y_axis_icon_color}"),),
    ),
    ThemeRule(
        selectors=('[fill="currentColor"]',),
        declarations=(("fill", "{y_axis_icon_color}"),),
    ),
    # Grid
    ThemeRule(
        selectors=('line[stroke="#c3d0d8"]', 'line[stroke="#56616c"]'),
        declarations=(
            ("stroke", "{grid_line_color}"),
            ("stroke-width", "{grid_line_width:g}px"),
            ("stroke-opacity", "{grid_line_opacity:g}"),
        ),
    ),
    # Series lines; the dash pattern separates wind from wind gust
    ThemeRule(
        selectors=('path[stroke="url(#temperature-curve-gradient)"]',),
        declarations=(("stroke", "{temperature_line_color}"),),
    ),
    ThemeRule(
        selectors=('path[stroke="#aa00f2"]:not([stroke-dasharray])',),
        declarations=(("stroke", "{wind_line_color}"),),
    ),
    ThemeRule(
        selectors=('path[stroke="#aa00f2"][stroke-dasharray]',),
        declarations=(("stroke", "{wind_gust_line_color}"),),
    ),
    # Legend chips (nested <svg> blocks); rx separates wind from wind gust
    ThemeRule(
        selectors=('svg rect[fill="#c60000"]',),
        declarations=(("fill", "{temperature_line_color}"),),
    ),
    ThemeRule(
        selectors=('svg rect[fill="#aa00f2"]:not([rx])',),
        declarations=(("fill", "{wind_line_color}"),),
    ),
    ThemeRule(
        selectors=('svg rect[fill="#aa00f2"][rx]',),
        declarations=(("fill", "{wind_gust_line_color}"),),
    ),
    # Precipitation
    ThemeRule(
        selectors=('rect[fill="#006edb"]',),
        declarations=(("fill", "{precipitation_bar_color}"),),
    ),
    ThemeRule(
        selectors=('line[stroke="#006edb"]', 'path[stroke="#006edb"]'),
        declarations=(("stroke", "{precipitation_bar_color}"),),
    ),
    ThemeRule(
        selectors=("#max-precipitation-pattern rect",),
        declarations=(("fill", "{max_precipitation_color}"), ("opacity", "0.3")),
    ),
    ThemeRule(
        selectors=("#max-precipitation-pattern line",),
        declarations=(("stroke", "{max_precipitation_color}"), ("opacity", "1")),
    ),
    # Coast graph series
    ThemeRule(
        selectors=(".coast-graph__wind",),
        declarations=(("color", "{coast_wind_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=(".graph-line--dashed.coast-graph__wind",),
        declarations=(("color", "{coast_wind_gust_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=(".coast-graph__wave-height",),
        declarations=(("color", "{wave_height_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=(".coast-graph__sea-current",),
        declarations=(("color", "{sea_current_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=(".graph-temperature-line>.graph-line:not(.graph-line--dashed)",),
        declarations=(("color", "{sea_air_temp_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=(".graph-temperature-line>.graph-line--dashed",),
        declarations=(("color", "{sea_water_temp_color}"),),
        in_svg=False,
    ),
    # Coast graph legend chips
    ThemeRule(
        selectors=('[data-type="wind-curve"] .graph-legend-new__line',),
        declarations=(("color", "{coast_wind_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=('[data-type="wind-gust-curve"] .graph-legend-new__line',),
        declarations=(("color", "{coast_wind_gust_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=('[data-type="wave-height-curve"] .graph-legend-new__line',),
        declarations=(("color", "{wave_height_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=('[data-type="sea-current-curve"] .graph-legend-new__line',),
        declarations=(("color", "{sea_current_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=('[data-type="sea-air-temp-curve"] .graph-legend-new__line',),
        declarations=(("color", "{sea_air_temp_color}"),),
        in_svg=False,
    ),
    ThemeRule(
        selectors=('[data-type="sea-water-temp-curve"] .graph-legend-new__line',),
        declarations=(("color", "{sea_water_temp_color}"),),
        in_svg=False,
    ),
    # Logos, matched by horizontal offset
    ThemeRule(
        selectors=('svg[x="16"] circle',),
        declarations=(("fill", "{yr_logo_background_color}"),),
    ),
    ThemeRule(
        selectors=('svg[x="16"] path',),
        declarations=(("fill", "{yr_logo_text_color}"),),
    ),
    ThemeRule(
        selectors=('svg[x="624"] path', 'svg[x="675.5"] path'),
        declarations=(("fill", "{logo_color}"),),
    ),
)
