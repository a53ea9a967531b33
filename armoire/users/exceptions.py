"""
Exceptions personnalisées pour le module de gestion des utilisateurs.
"""

class UserError(Exception):
    """Classe de base pour les exceptions liées aux utilisateurs."""
    pass

class UserNotFoundError(UserError):
    """Levée lorsque l'utilisateur n'est pas trouvé."""
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"Utilisateur {user_id} non trouvé")

class UserAlreadyExistsError(UserError):
    """Levée lorsqu'un utilisateur avec cet email existe déjà."""
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Un utilisateur avec l'email {email} existe déjà")

class InvalidTokenError(UserError):
    """Levée lorsqu'un token de vérification est inconnu ou expiré."""
    def __init__(self, message: str = "Token invalide ou expiré"):
        super().__init__(message)
