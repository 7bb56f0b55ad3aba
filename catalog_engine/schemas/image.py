"""商品图片表

图片本体只存一份（单字节图片键 → 图片），多个属性组合通过图片组键
共享同一组图片，避免在每个组合里重复存储。
"""

from typing import Annotated

from pydantic import BaseModel, Field

from catalog_engine.schemas.common import U8, U32

ImageKey = U8
ImageGroupKey = U32


class ImageData(BaseModel):
    """带说明文字的图片"""

    url: str = Field(..., description="图片地址")
    caption: str | None = Field(None, description="图片说明")


class ItemImagesV1(BaseModel):
    """图片表（V1）"""

    # 图片本体
    images: dict[ImageKey, ImageData] = Field(default_factory=dict)
    # 图片组 → 有序图片键列表，第一个为基础图（缩略图）
    groups: dict[ImageGroupKey, Annotated[list[ImageKey], Field(min_length=1)]] = Field(
        default_factory=dict
    )

    def image_list(self, group_key: int) -> list[ImageData] | None:
        """获取图片组的完整图片列表

        图片组不存在，或组内任意一个图片键找不到图片时返回 None，
        不返回残缺的列表。
        """
        image_keys = self.groups.get(group_key)
        if image_keys is None:
            return None

        images = []
        for image_key in image_keys:
            image = self.images.get(image_key)
            if image is None:
                return None
            images.append(image)
        return images

    def base_image(self, group_key: int) -> ImageData | None:
        """获取图片组的基础图（第一张）"""
        images = self.image_list(group_key)
        if not images:
            return None
        return images[0]
