"""Exceptions spécifiques au catalogue de designs."""


class DesignDomainException(Exception):
    """Classe de base pour les exceptions du catalogue."""
    pass


class DesignNotFoundException(DesignDomainException):
    def __init__(self, design_id):
        self.design_id = design_id
        super().__init__(f"Design {design_id} non trouvé.")


class DesignCategoryNotFoundException(DesignDomainException):
    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Catégorie de design {identifier} non trouvée.")


class InvalidSortFieldException(DesignDomainException):
    def __init__(self, field: str, allowed):
        self.field = field
        super().__init__(f"Champ de tri invalide: {field}. Valeurs possibles: {', '.join(allowed)}")
