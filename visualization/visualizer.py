"""
Visualization system for the sheet layout planner.
"""
import tkinter as tk
from tkinter import ttk, Canvas, Frame, Scrollbar
from typing import List, Sequence

from config import CANVAS_SCALE, ZOOM_LIMITS
from models.part import Component, PlacementResult, Sheet
from visualization.layout_drawing import build_sheet_drawing, sheet_status


class LayoutVisualizer:
    def __init__(self, parent):
        self.parent = parent
        self.zoom_level = 1.0
        self.sheets: Sequence[Sheet] = ()
        self.components: Sequence[Component] = ()
        self.result = PlacementResult()
        self.canvases: List[Canvas] = []
        self.create_widgets()

    def create_widgets(self):
        zoom_frame = Frame(self.parent)
        zoom_frame.pack(side=tk.TOP, fill=tk.X, padx=10, pady=5)
        ttk.Button(zoom_frame, text="Zoom in (1.2x)",
                   command=lambda: self.zoom(1.2)).pack(side=tk.LEFT, padx=5)
        ttk.Button(zoom_frame, text="Zoom out (0.8x)",
                   command=lambda: self.zoom(0.8)).pack(side=tk.LEFT, padx=5)
        ttk.Button(zoom_frame, text="Reset view",
                   command=self.reset_view).pack(side=tk.LEFT, padx=5)
        container = Frame(self.parent)
        container.pack(fill=tk.BOTH, expand=True)
        self.scroll_canvas = Canvas(container, bg="white")
        vscroll = Scrollbar(container, orient=tk.VERTICAL, command=self.scroll_canvas.yview)
        hscroll = Scrollbar(container, orient=tk.HORIZONTAL, command=self.scroll_canvas.xview)
        self.scroll_canvas.configure(yscrollcommand=vscroll.set, xscrollcommand=hscroll.set)
        self.scroll_canvas.grid(row=0, column=0, sticky="nsew")
        vscroll.grid(row=0, column=1, sticky="ns")
        hscroll.grid(row=1, column=0, sticky="ew")
        container.grid_rowconfigure(0, weight=1)
        container.grid_columnconfigure(0, weight=1)
        self.inner = Frame(self.scroll_canvas, bg="white")
        self.scroll_canvas.create_window((0, 0), window=self.inner, anchor="nw")
        self.inner.bind("<Configure>", lambda event: self.scroll_canvas.configure(
            scrollregion=self.scroll_canvas.bbox("all")))

    def show(self, sheets: Sequence[Sheet], components: Sequence[Component], result: PlacementResult):
        self.sheets = sheets
        self.components = components
        self.result = result
        self.redraw()

    def clear(self):
        for child in self.inner.winfo_children():
            child.destroy()
        self.canvases = []

    def redraw(self):
        self.clear()
        scale = CANVAS_SCALE * self.zoom_level
        for sheet_index, sheet in enumerate(self.sheets):
            frame = ttk.LabelFrame(self.inner, text=f"Sheet {sheet_index + 1}")
            frame.pack(side=tk.TOP, anchor=tk.W, padx=10, pady=10)
            canvas = Canvas(frame, width=sheet.width * scale, height=sheet.length * scale,
                            bg="white", highlightthickness=0)
            canvas.pack(padx=5, pady=5)
            self.draw_items(canvas, build_sheet_drawing(sheet, sheet_index, self.components,
                                                        self.result, scale))
            ttk.Label(frame, text=sheet_status(sheet, sheet_index, self.components, self.result),
                      anchor=tk.W).pack(fill=tk.X, padx=5)
            self.canvases.append(canvas)

    def draw_items(self, canvas, items):
        for item in items:
            if item['kind'] == 'rect':
                options = {'fill': item['fill'], 'outline': item['outline']}
                if 'stipple' in item:
                    options['stipple'] = item['stipple']
                canvas.create_rectangle(*item['coords'], **options)
            else:
                canvas.create_text(*item['coords'], text=item['text'],
                                   fill=item['fill'], font=item['font'])

    def zoom(self, factor):
        low, high = ZOOM_LIMITS
        self.zoom_level = min(max(self.zoom_level * factor, low), high)
        self.redraw()

    def reset_view(self):
        self.zoom_level = 1.0
        self.redraw()
