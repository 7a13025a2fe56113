from tomenest.extensions import db


class StockItem(db.Model):
    __tablename__ = "stock"

    id = db.Column(db.Integer, primary_key=True)
    openlibraryid = db.Column(
        db.String(32), db.ForeignKey("books.openlibraryid"), nullable=False, index=True
    )
    quality = db.Column(db.Integer, nullable=False)   # 1..5 kondisyon
    quantity = db.Column(db.Integer, nullable=False, default=0)  # rafta duran kopya

    book = db.relationship("Book", back_populates="stock_items")

    __table_args__ = (
        db.UniqueConstraint("openlibraryid", "quality", name="uq_stock_olid_quality"),
        db.CheckConstraint("quantity >= 0", name="ck_stock_quantity_nonneg"),
        db.CheckConstraint("quality BETWEEN 1 AND 5", name="ck_stock_quality_range"),
    )
