"""
Pydantic request/response models for the import wizard API.

The core works on frozen dataclasses; these models are the JSON boundary and
convert to and from them.
"""

from pydantic import BaseModel, Field

from promptbank.core.import_wizard import (
    Bank,
    Category,
    CompileResult,
    ImportSession,
    ProcessedBank,
    Segment,
    SegmentKind,
    Selection,
    WizardStep,
)


class CategoryModel(BaseModel):
    label: str
    color_tag: str | None = None


class BankModel(BaseModel):
    label: str
    category_id: str | None = None
    options: list[str] = Field(default_factory=list)

    def to_bank(self) -> Bank:
        return Bank(
            label=self.label,
            category_id=self.category_id,
            options=tuple(self.options),
        )


class OpenSessionRequest(BaseModel):
    categories: dict[str, CategoryModel]
    existing_banks: dict[str, BankModel] = Field(default_factory=dict)
    raw_text: str = ""

    def to_categories(self) -> dict[str, Category]:
        return {
            category_id: Category(
                id=category_id, label=model.label, color_tag=model.color_tag
            )
            for category_id, model in self.categories.items()
        }

    def to_banks(self) -> dict[str, Bank]:
        return {bank_id: model.to_bank() for bank_id, model in self.existing_banks.items()}


class SetTextRequest(BaseModel):
    raw_text: str


class AddSelectionRequest(BaseModel):
    text: str
    category_id: str
    bank_id: str
    bank_name: str
    is_new_bank: bool = False


class SelectionOut(BaseModel):
    id: str
    text: str
    category_id: str
    bank_id: str
    bank_name: str
    is_new_bank: bool

    @classmethod
    def from_selection(cls, selection: Selection) -> "SelectionOut":
        return cls(
            id=selection.id,
            text=selection.text,
            category_id=selection.category_id,
            bank_id=selection.bank_id,
            bank_name=selection.bank_name,
            is_new_bank=selection.is_new_bank,
        )


class SessionOut(BaseModel):
    session_id: str
    step: WizardStep
    raw_text: str
    default_category_id: str
    selections: list[SelectionOut]

    @classmethod
    def from_session(
        cls, session_id: str, session: ImportSession, default_category_id: str
    ) -> "SessionOut":
        return cls(
            session_id=session_id,
            step=session.step,
            raw_text=session.raw_text,
            default_category_id=default_category_id,
            selections=[SelectionOut.from_selection(s) for s in session.list()],
        )


class BankEntryOut(BaseModel):
    bank_id: str
    label: str
    category_id: str | None = None
    options: list[str]
    is_existing: bool


class SegmentOut(BaseModel):
    text: str
    kind: SegmentKind
    selection_id: str | None = None
    label: str | None = None

    @classmethod
    def from_segment(cls, segment: Segment, label: str | None = None) -> "SegmentOut":
        return cls(
            text=segment.text,
            kind=segment.kind,
            selection_id=segment.selection.id if segment.selection else None,
            label=label,
        )


class ProcessedBankOut(BaseModel):
    bank_id: str
    bank_name: str
    category_id: str
    option_text: str
    is_new_bank: bool

    @classmethod
    def from_processed(cls, entry: ProcessedBank) -> "ProcessedBankOut":
        return cls(
            bank_id=entry.bank_id,
            bank_name=entry.bank_name,
            category_id=entry.category_id,
            option_text=entry.option_text,
            is_new_bank=entry.is_new_bank,
        )


class CompileOut(BaseModel):
    final_content: str
    processed_banks: list[ProcessedBankOut]

    @classmethod
    def from_result(cls, result: CompileResult) -> "CompileOut":
        return cls(
            final_content=result.final_content,
            processed_banks=[
                ProcessedBankOut.from_processed(entry)
                for entry in result.processed_banks
            ],
        )


class BankIdOut(BaseModel):
    bank_id: str
