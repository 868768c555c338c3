from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from storefront.models.product import Product, ProductVariant
from storefront.schemas.product_schema import ProductIn


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def list(self, q: Optional[str] = None, category: Optional[str] = None) -> List[Product]:
        """Newest first. `q` matches name or collection, case-insensitive."""
        query = self.db.query(Product)
        if q:
            like = f"%{q}%"
            query = query.filter(
                (Product.name.ilike(like)) | (Product.collection.ilike(like))
            )
        if category:
            query = query.filter(Product.category == category)
        return query.order_by(Product.created_at.desc(), Product.id.desc()).all()

    def create(self, data: ProductIn) -> Product:
        fields = data.model_dump(exclude={"variants"})
        fields["name"] = fields["name"].strip()[:100]
        p = Product(**fields)
        p.variants = [ProductVariant(**v.model_dump()) for v in data.variants]
        self.db.add(p)
        self.db.flush()
        return p

    def update(self, product: Product, data: ProductIn) -> Product:
        fields = data.model_dump(exclude={"variants"})
        fields["name"] = fields["name"].strip()[:100]
        for k, v in fields.items():
            setattr(product, k, v)
        # variants are owned by the product: update by name, drop missing, add new
        current = {v.name: v for v in product.variants}
        wanted = {v.name for v in data.variants}
        for name, v in current.items():
            if name not in wanted:
                product.variants.remove(v)
        self.db.flush()
        for v in data.variants:
            if v.name in current:
                for k, val in v.model_dump().items():
                    setattr(current[v.name], k, val)
            else:
                product.variants.append(ProductVariant(**v.model_dump()))
        self.db.flush()
        return product

    def delete(self, product: Product):
        self.db.delete(product)
        self.db.flush()

    def _stock_row(self, product_id: int, variant_name: Optional[str]) -> Tuple[type, object]:
        if variant_name is None:
            row = (
                self.db.query(Product)
                .filter(Product.id == product_id)
                .with_for_update()
                .first()
            )
            return Product, row
        row = (
            self.db.query(ProductVariant)
            .filter(
                ProductVariant.product_id == product_id,
                ProductVariant.name == variant_name,
            )
            .with_for_update()
            .first()
        )
        return ProductVariant, row

    def deduct_stock(self, product_id: int, qty: int, variant_name: Optional[str] = None) -> bool:
        """
        Subtract qty from the product (or variant) stock with a single
        conditional UPDATE, so two concurrent sales can never take stock
        below zero.

        Returns False when tracked stock is lower than qty (nothing changed).
        Untracked stock (NULL) is left alone and counts as success.
        Raises LookupError when the product/variant does not exist.
        """
        model, row = self._stock_row(product_id, variant_name)
        if row is None:
            raise LookupError(f"Product {product_id} variant={variant_name!r} not found")
        if row.stock is None:
            return True
        updated = (
            self.db.query(model)
            .filter(model.id == row.id, model.stock >= qty)
            .update({model.stock: model.stock - qty}, synchronize_session=False)
        )
        self.db.flush()
        return updated == 1

    def restock(self, product_id: int, qty: int, variant_name: Optional[str] = None):
        model, row = self._stock_row(product_id, variant_name)
        if row is None:
            raise LookupError(f"Product {product_id} variant={variant_name!r} not found")
        if row.stock is None:
            return
        self.db.query(model).filter(model.id == row.id).update(
            {model.stock: model.stock + qty}, synchronize_session=False
        )
        self.db.flush()

    def increment_clicks(self, product_id: int) -> bool:
        updated = (
            self.db.query(Product)
            .filter(Product.id == product_id)
            .update(
                {Product.whatsapp_clicks: Product.whatsapp_clicks + 1},
                synchronize_session=False,
            )
        )
        self.db.flush()
        return updated == 1

    def reset_clicks(self) -> int:
        updated = self.db.query(Product).update(
            {Product.whatsapp_clicks: 0}, synchronize_session=False
        )
        self.db.flush()
        return updated
