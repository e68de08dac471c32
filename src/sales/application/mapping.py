"""Projection of the Sale aggregate onto output DTOs."""

from __future__ import annotations

from sales.application.dto import SaleDTO, SaleItemDTO
from sales.domain.model.sale import Sale, SaleItem


def to_sale_dto(sale: Sale) -> SaleDTO:
    return SaleDTO(
        id=sale.id,
        sale_number=sale.sale_number,
        sale_date=sale.sale_date,
        customer_id=sale.customer_id,
        customer_name=sale.customer_name,
        branch_id=sale.branch_id,
        branch_name=sale.branch_name,
        total_amount=sale.total_amount.amount,
        currency=sale.currency,
        status=sale.status.value,
        created_at=sale.created_at,
        updated_at=sale.updated_at,
        items=[to_sale_item_dto(item) for item in sale.items],
    )


def to_sale_item_dto(item: SaleItem) -> SaleItemDTO:
    return SaleItemDTO(
        id=item.id,
        product_id=item.product_id,
        product_name=item.product_name,
        quantity=item.quantity,
        unit_price=item.unit_price.amount,
        discount_percentage=item.discount_percentage,
        discount_amount=item.discount_amount.amount,
        total_amount=item.total_amount.amount,
        is_cancelled=item.is_cancelled,
    )
