from storage.store import LayoutStore
