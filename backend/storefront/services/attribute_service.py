import re
import unicodedata
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.models.product_attribute import AttributeType
from storefront.repositories.attribute_repo import AttributeRepository
from storefront.schemas.attribute_schema import AttributeIn, AttributeOut
from storefront.utils.log import get_logger

log = get_logger("attributes")


class AttributeException(Exception):
    pass


class AttributeNotFound(AttributeException):
    pass


class AttributeConflict(AttributeException):
    pass


def slugify(name: str) -> str:
    """'Colección Luna' -> 'coleccion-luna'. Accents are folded, not dropped."""
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^\w\s-]", "", folded.lower().strip())
    return re.sub(r"[\s_-]+", "-", slug)


class AttributeService:
    """Categories and collections managed from the admin panel."""

    def __init__(self, db: Session):
        self.db = db
        self.attributes = AttributeRepository(db)

    def list(self, type: Optional[AttributeType] = None) -> List[AttributeOut]:
        return [AttributeOut.model_validate(a) for a in self.attributes.list(type)]

    def create(self, data: AttributeIn) -> AttributeOut:
        name = data.name.strip()
        if not name:
            raise AttributeException("El nombre es obligatorio")
        slug = slugify(name)
        if not slug:
            raise AttributeException("El nombre debe contener letras o números")
        try:
            a = self.attributes.create(data.type, name, slug)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AttributeConflict(f"Ya existe {data.type.value} '{name}'") from e
        log.info(f"attribute created {a.type.value}:{a.slug}")
        return AttributeOut.model_validate(a)

    def delete(self, attribute_id: int):
        a = self.attributes.get(attribute_id)
        if a is None:
            raise AttributeNotFound("Attribute not found")
        self.attributes.delete(a)
        self.db.commit()
