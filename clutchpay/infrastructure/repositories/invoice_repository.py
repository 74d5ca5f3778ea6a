"""Persistence helpers for invoice entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Query, Session

from clutchpay.domain.entities import Invoice, InvoiceStatus
from clutchpay.infrastructure.models import InvoiceModel
from clutchpay.utils import ensure_app_naive_datetime, ensure_app_timezone

from .user_repository import UserRepository


class InvoiceRepository:
    """Provide read access to invoices and their issuer/debtor users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, invoice: Invoice) -> Invoice:
        model = InvoiceModel(
            invoice_number=invoice.invoice_number,
            issuer_user_id=invoice.issuer_user_id,
            debtor_user_id=invoice.debtor_user_id,
            subject=invoice.subject,
            description=invoice.description,
            amount=invoice.amount,
            status=InvoiceStatus(invoice.status).value,
            due_date=ensure_app_naive_datetime(invoice.due_date),
        )
        if invoice.issue_date is not None:
            model.issue_date = ensure_app_naive_datetime(invoice.issue_date)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self.to_entity(model)

    def list_due_between(
        self,
        start: datetime,
        end: datetime,
        *,
        statuses: Iterable[InvoiceStatus],
    ) -> Sequence[Invoice]:
        """Return invoices in ``statuses`` whose due date lies in ``[start, end]``."""

        query = self._open_invoices_query(statuses).filter(
            InvoiceModel.due_date >= ensure_app_naive_datetime(start),
            InvoiceModel.due_date <= ensure_app_naive_datetime(end),
        )
        return [self.to_entity(model) for model in query.all()]

    def list_due_before(
        self,
        cutoff: datetime,
        *,
        statuses: Iterable[InvoiceStatus],
    ) -> Sequence[Invoice]:
        """Return invoices in ``statuses`` whose due date is strictly before ``cutoff``."""

        query = self._open_invoices_query(statuses).filter(
            InvoiceModel.due_date < ensure_app_naive_datetime(cutoff)
        )
        return [self.to_entity(model) for model in query.all()]

    def _open_invoices_query(self, statuses: Iterable[InvoiceStatus]) -> Query:
        status_values = [InvoiceStatus(status).value for status in statuses]
        return (
            self.session.query(InvoiceModel)
            .filter(InvoiceModel.status.in_(status_values))
            .filter(InvoiceModel.due_date.is_not(None))
            .order_by(InvoiceModel.due_date.asc(), InvoiceModel.id.asc())
        )

    @staticmethod
    def to_entity(model: InvoiceModel) -> Invoice:
        return Invoice(
            id=model.id,
            invoice_number=model.invoice_number,
            issuer_user=UserRepository.to_entity(model.issuer_user),
            debtor_user=UserRepository.to_entity(model.debtor_user),
            subject=model.subject,
            description=model.description,
            amount=Decimal(model.amount),
            status=InvoiceStatus(model.status),
            issue_date=ensure_app_timezone(model.issue_date),
            due_date=ensure_app_timezone(model.due_date),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["InvoiceRepository"]
