# coding: utf-8
"""Plotly rendering of the Bragg diffraction scene.

The figure shows the lattice sites, every ray as a dashed baseline with its
sampled wave, the wavefront markers, the path length difference region and
the "in phase" caption.  :func:`build_animation` adds frames produced by
stepping the model so the waves travel when played.
"""

from __future__ import annotations

import math

import numpy as np
import plotly.graph_objects as go

from .constants import BASELINE_DASH, MANUAL_STEP_DT
from .model import XrayDiffractionModel
from .rays import RayScene, RaySegment
from .waveform import WavefrontMode, sample_ray, wavefront_color

__all__ = ["build_scene_figure", "build_animation", "main"]

SITE_COLOR = "#ed4545"
PLD_FILL = "rgba(64, 0, 0, 0.25)"


def _segment_style(seg: RaySegment, in_phase: bool) -> tuple[str, float]:
    """Stroke colour and width of a ray's wave."""
    if seg.kind == "reflected":
        return ("black", 2.0) if in_phase else ("gray", 1.0)
    if seg.kind == "transmitted":
        return ("hsl(0, 0%, 25%)", 1.5) if in_phase else ("black", 2.0)
    return "black", 2.0


def _joined(lines: list[np.ndarray]) -> tuple[list, list]:
    """Concatenate polylines into one ``x``/``y`` pair separated by ``None``."""
    xs: list = []
    ys: list = []
    for pts in lines:
        xs.extend(pts[:, 0].tolist() + [None])
        ys.extend(pts[:, 1].tolist() + [None])
    return xs, ys


def _palette(mode: WavefrontMode) -> list[str]:
    if mode is WavefrontMode.GRAYSCALE:
        return [wavefront_color(i, mode) for i in range(3)]
    if mode is WavefrontMode.HUE:
        return [wavefront_color(i, mode) for i in range(6)]
    return []


def _scene_traces(model: XrayDiffractionModel, scene: RayScene) -> list:
    in_phase = model.pld_state.in_phase
    sites = model.lattice.sites.sites
    traces: list = [
        go.Scatter(x=sites[:, 0], y=sites[:, 1], mode="markers",
                   marker=dict(color=SITE_COLOR, size=9, line=dict(color="#f00", width=1)),
                   name="Lattice sites", hoverinfo="skip"),
    ]

    fronts: dict[str, list[np.ndarray]] = {color: [] for color in _palette(model.wavefront_mode)}
    for seg in scene.segments():
        sampled = sample_ray(seg)
        color, width = _segment_style(seg, in_phase)
        traces.append(go.Scatter(x=sampled.baseline[:, 0], y=sampled.baseline[:, 1], mode="lines",
                                 line=dict(color="gray", width=width / 2, dash=f"{BASELINE_DASH}px"),
                                 showlegend=False, hoverinfo="skip"))
        traces.append(go.Scatter(x=sampled.wave[:, 0], y=sampled.wave[:, 1], mode="lines",
                                 line=dict(color=color, width=width),
                                 name=seg.kind, showlegend=False, hoverinfo="skip"))
        for marker in sampled.wavefronts:
            fronts[marker.color].append(np.vstack([marker.start, marker.end]))

    for color, lines in fronts.items():
        xs, ys = _joined(lines)
        traces.append(go.Scatter(x=xs, y=ys, mode="lines", line=dict(color=color, width=3),
                                 showlegend=False, hoverinfo="skip"))

    region = scene.path_difference
    if region is not None:
        traces.append(go.Scatter(x=region.edge[:, 0], y=region.edge[:, 1], mode="lines",
                                 line=dict(color="blue", width=1), showlegend=False))
        for wedge in region.wedges:
            closed = np.vstack([wedge, wedge[:1]])
            traces.append(go.Scatter(x=closed[:, 0], y=closed[:, 1], mode="lines", fill="toself",
                                     fillcolor=PLD_FILL, line=dict(color="black", width=1),
                                     showlegend=False, hoverinfo="skip"))
    return traces


def _scene_annotations(model: XrayDiffractionModel, scene: RayScene) -> list[dict]:
    notes: list[dict] = []
    region = scene.path_difference
    if region is not None:
        notes.append(dict(x=region.arrow_end[0], y=region.arrow_end[1],
                          ax=region.arrow_start[0], ay=region.arrow_start[1],
                          xref="x", yref="y", axref="x", ayref="y",
                          showarrow=True, arrowhead=2, arrowside="end+start", text=""))
        notes.append(dict(x=region.label_position[0], y=region.label_position[1],
                          xref="x", yref="y", showarrow=False, xanchor="left",
                          text="d <i>sin</i>(θ)", bgcolor="rgba(255,255,255,0.6)"))
    label = scene.in_phase_label
    if label is not None:
        notes.append(dict(x=label.position[0], y=label.position[1], xref="x", yref="y",
                          showarrow=False, textangle=math.degrees(label.rotation),
                          text=f"In phase: {label.wavelengths} λ path difference"))
    return notes


def _title(model: XrayDiffractionModel) -> str:
    pld = model.pld_state
    return (f"θ = {math.degrees(model.source.angle):.1f}°, "
            f"λ = {model.source.wavelength:.1f} Å, "
            f"a = {model.constants.a:.1f} Å, d = {model.constants.c:.1f} Å, "
            f"2d sin(θ) = {pld.pld:.1f} Å, 2d sin(θ)/λ = {pld.pld_in_wavelengths:.2f}")


def build_scene_figure(model: XrayDiffractionModel | None = None) -> go.Figure:
    """Return a Plotly figure of the model's current frame.

    The y axis is reversed so that the view frame (``y`` down) appears the
    same way up as in the classroom demonstration.
    """

    model = model or XrayDiffractionModel()
    scene = model.scene()
    fig = go.Figure(data=_scene_traces(model, scene))
    fig.update_xaxes(visible=False, scaleanchor="y")
    fig.update_yaxes(visible=False, autorange="reversed")
    fig.update_layout(
        title=_title(model),
        annotations=_scene_annotations(model, scene),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=0, r=0, b=0, t=40),
        showlegend=False,
    )
    return fig


def build_animation(model: XrayDiffractionModel | None = None,
                    n_frames: int = 50,
                    dt: float = MANUAL_STEP_DT) -> go.Figure:
    """Figure with ``n_frames`` frames, each one step of ``dt`` seconds later.

    The model's phase is advanced in place; its other parameters are left
    untouched.
    """

    model = model or XrayDiffractionModel()
    fig = build_scene_figure(model)

    frames = []
    for i in range(n_frames):
        scene = model.manual_step(dt)
        frames.append(go.Frame(name=f"f{i}", data=_scene_traces(model, scene),
                               layout=dict(annotations=_scene_annotations(model, scene))))
    fig.frames = frames

    fig.update_layout(updatemenus=[dict(type="buttons",
                                        direction="left", x=0.5, y=1.07, xanchor="center",
                                        buttons=[
                                            dict(label="▶ Play / Loop", method="animate",
                                                 args=[None, dict(frame=dict(duration=40, redraw=True),
                                                                  transition=dict(duration=0),
                                                                  fromcurrent=True, mode="immediate")]),
                                            dict(label="■ Stop", method="animate",
                                                 args=[[None], dict(frame=dict(duration=0, redraw=False),
                                                                    transition=dict(duration=0),
                                                                    mode="immediate")])])])
    return fig


def main(model: XrayDiffractionModel | None = None, frames: int = 0) -> None:
    """Entry point for the ``xrd-bragg`` script."""

    import plotly.io as pio

    pio.renderers.default = "browser"
    fig = build_animation(model, frames) if frames > 0 else build_scene_figure(model)
    fig.show()


if __name__ == "__main__":
    main()
