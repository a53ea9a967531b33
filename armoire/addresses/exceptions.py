"""Exceptions spécifiques au domaine Adresse."""


class AddressDomainException(Exception):
    """Classe de base pour les exceptions du domaine Adresse."""
    pass


class AddressNotFoundException(AddressDomainException):
    """
    Levée lorsque l'adresse n'existe pas ou n'appartient pas à l'utilisateur.

    Les deux cas produisent le même message.
    """
    def __init__(self, address_id):
        self.address_id = address_id
        super().__init__(f"Adresse {address_id} non trouvée.")


class AddressOwnerNotFoundException(AddressDomainException):
    """Levée lorsque l'utilisateur propriétaire n'existe pas."""
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"Utilisateur {user_id} non trouvé.")
