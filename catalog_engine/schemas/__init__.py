"""数据结构定义"""

from catalog_engine.schemas.attr import (
    ATTR_SLOTS,
    AttrColor,
    AttrCoreSpecificDataResponse,
    AttrDimension,
    AttrIndex,
    AttrIndexes,
    AttrKeys,
    AttrSpecificData,
    AttrSpecificDataResponse,
    AttrStatus,
    AttrStatuses,
    AttrText,
    ItemAttrsV1,
)
from catalog_engine.schemas.audit import AuditEntry, AuditLevel
from catalog_engine.schemas.common import Currency
from catalog_engine.schemas.image import ImageData, ItemImagesV1
from catalog_engine.schemas.item import Item, ItemVersionV1, PreviousItemKey
from catalog_engine.schemas.page import (
    AttrRequest,
    ItemCoreDataRequest,
    ItemPageRequest,
    ItemPageResponse,
    ItemPageStaticData,
)
from catalog_engine.schemas.spec import (
    ItemSpecsV1,
    SpecCategory,
    SpecCategoryResponse,
    SpecKey,
    SpecKeyLabel,
    SpecLabel,
    SpecLabelResponse,
)
from catalog_engine.schemas.store import (
    StoreData,
    StoreDataNone,
    StoreDataV1,
    StoreInitArg,
    StoreUpdateResponse,
)

__all__ = [
    "ATTR_SLOTS",
    "AttrColor",
    "AttrCoreSpecificDataResponse",
    "AttrDimension",
    "AttrIndex",
    "AttrIndexes",
    "AttrKeys",
    "AttrRequest",
    "AttrSpecificData",
    "AttrSpecificDataResponse",
    "AttrStatus",
    "AttrStatuses",
    "AttrText",
    "AuditEntry",
    "AuditLevel",
    "Currency",
    "ImageData",
    "Item",
    "ItemAttrsV1",
    "ItemCoreDataRequest",
    "ItemImagesV1",
    "ItemPageRequest",
    "ItemPageResponse",
    "ItemPageStaticData",
    "ItemSpecsV1",
    "ItemVersionV1",
    "PreviousItemKey",
    "SpecCategory",
    "SpecCategoryResponse",
    "SpecKey",
    "SpecKeyLabel",
    "SpecLabel",
    "SpecLabelResponse",
    "StoreData",
    "StoreDataNone",
    "StoreDataV1",
    "StoreInitArg",
    "StoreUpdateResponse",
]
