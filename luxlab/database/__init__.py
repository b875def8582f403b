from luxlab.database.library import LuminaireEntry, LuminaireLibrary, demo_ies_path

__all__ = ["LuminaireEntry", "LuminaireLibrary", "demo_ies_path"]
