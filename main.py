"""
Entry point for the sheet layout planner.
"""

import logging
import tkinter as tk

from config import LOG_FORMAT, LOG_LEVEL, STATE_FILE
from storage.store import LayoutStore
from ui.app_ui import SheetLayoutApp


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    root = tk.Tk()
    app = SheetLayoutApp(root, LayoutStore(STATE_FILE))
    root.mainloop()

if __name__ == "__main__":
    main()
