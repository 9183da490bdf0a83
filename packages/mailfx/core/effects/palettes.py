"""Uniform color palettes and font stacks used by the random policy."""

from __future__ import annotations

TEXT_COLOR_PALETTE: tuple[str, ...] = (
    "#000000",
    "#c0392b",
    "#e74c3c",
    "#e67e22",
    "#f1c40f",
    "#27ae60",
    "#16a085",
    "#2980b9",
    "#8e44ad",
    "#e91e63",
    "#795548",
    "#7f8c8d",
)

BACKGROUND_COLOR_PALETTE: tuple[str, ...] = (
    "#ffff00",
    "#fff3b0",
    "#ffd1dc",
    "#ffe4b5",
    "#c1f0c1",
    "#cce5ff",
    "#e6ccff",
    "#d5f5e3",
    "#f5f5f5",
    "#000000",
)

FONT_FAMILIES: tuple[str, ...] = (
    "Arial, sans-serif",
    "Times New Roman, serif",
    "Georgia, serif",
    "Verdana, sans-serif",
    "Courier New, monospace",
    "Segoe UI, sans-serif",
    "Calibri, sans-serif",
    "Trebuchet MS, sans-serif",
    "Comic Sans MS, cursive",
    "Papyrus, fantasy",
    "Impact, sans-serif",
    "Tangerine, cursive",
    "Cinzel Decorative, serif",
    "MedievalSharp, cursive",
    "Uncial Antiqua, cursive",
)
