from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RawMaterial(CatalogModel):
    id: str = Field(
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    code: str
    name: str
    category_id: str = Field(alias="categoryId")
    category_name: str = Field(alias="categoryName")
    sub_category_id: str = Field(alias="subCategoryId")
    sub_category_name: str = Field(alias="subCategoryName")
    unit_id: Optional[str] = Field(None, alias="unitId")
    unit_name: Optional[str] = Field(None, alias="unitName")
    hsn_code: Optional[str] = Field(None, alias="hsnCode")
    created_at: str = Field(alias="createdAt")
    last_added_price: Optional[float] = Field(None, alias="lastAddedPrice")
    last_vendor_name: Optional[str] = Field(None, alias="lastVendorName")
    last_price_date: Optional[str] = Field(None, alias="lastPriceDate")


class VendorPrice(CatalogModel):
    id: str = Field(
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    raw_material_id: str = Field(alias="rawMaterialId")
    vendor_id: str = Field(alias="vendorId")
    vendor_name: str = Field(alias="vendorName")
    quantity: float
    unit_name: Optional[str] = Field(None, alias="unitName")
    price: float
    added_date: str = Field(alias="addedDate")


class PriceLog(CatalogModel):
    id: str = Field(
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    raw_material_id: str = Field(alias="rawMaterialId")
    vendor_id: str = Field(alias="vendorId")
    vendor_name: str = Field(alias="vendorName")
    old_price: float = Field(alias="oldPrice")
    new_price: float = Field(alias="newPrice")
    quantity: float
    unit_name: Optional[str] = Field(None, alias="unitName")
    change_date: str = Field(alias="changeDate")
    changed_by: str = Field(alias="changedBy")


class RawMaterialDetail(CatalogModel):
    raw_material: RawMaterial = Field(alias="rawMaterial")
    vendor_prices: List[VendorPrice] = Field(default_factory=list, alias="vendorPrices")
    price_logs: List[PriceLog] = Field(default_factory=list, alias="priceLogs")


__all__ = ["PriceLog", "RawMaterial", "RawMaterialDetail", "VendorPrice"]
