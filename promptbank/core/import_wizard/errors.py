"""Exceptions raised by the import wizard core."""


class ImportWizardError(Exception):
    """Base class for import wizard errors."""


class InvalidSelection(ImportWizardError, ValueError):
    """A selection was rejected by ``SelectionStore.add``.

    The store is left unchanged when this is raised.
    """


class InvalidTransition(ImportWizardError):
    """A wizard step guard was violated (e.g. annotating blank text)."""
