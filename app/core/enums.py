from enum import Enum


class AssetCategory(str, Enum):
    """Furniture categories an asset can belong to."""

    TEMPAT_TIDUR = "tempat_tidur"  # bed
    MEJA = "meja"  # desk / table
    LEMARI = "lemari"  # wardrobe
    KURSI = "kursi"  # chair
    LAINNYA = "lainnya"  # other

    @property
    def label(self) -> str:
        return _ASSET_CATEGORY_LABELS[self]


_ASSET_CATEGORY_LABELS = {
    AssetCategory.TEMPAT_TIDUR: "Tempat Tidur",
    AssetCategory.MEJA: "Meja",
    AssetCategory.LEMARI: "Lemari",
    AssetCategory.KURSI: "Kursi",
    AssetCategory.LAINNYA: "Lainnya",
}


class FunctionZone(str, Enum):
    """Area of the room an asset serves."""

    SLEEPING = "sleeping"
    STUDY = "study"
    STORAGE = "storage"
    LEISURE = "leisure"


class AssetCondition(str, Enum):
    """Physical condition of an asset."""

    NEW = "new"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_REPAIR = "needs_repair"


__all__ = ["AssetCategory", "AssetCondition", "FunctionZone"]
