"""
Génération des codes propriété (NA007, OH041237, ...).

Le générateur demande d'abord un code à la fonction SQL
`generate_property_code` (compteur par type et neuf/ancien). Si elle échoue
ou ne renvoie rien, un code est synthétisé localement :
préfixe + 4 derniers chiffres du timestamp (ms) + 2 chiffres aléatoires.

Chaque candidat est vérifié contre les codes existants avant d'être proposé.
Une vérification en erreur est retentée puis fait échouer la génération :
elle n'est jamais interprétée comme "code disponible".
"""
import logging
import random
import re
import time
from typing import Callable, Optional, Set, Tuple

from app.core.exceptions import PropertyCodeError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "PR"

# Premier motif contenu dans le type -> préfixe
PREFIX_RULES = (
    ("New Apartment", "NA"),
    ("Old Apartment", "OA"),
    ("New House", "NH"),
    ("Old House", "OH"),
    ("Site", "S"),
)

AuthoritativeGenerator = Callable[[str, bool], Optional[str]]
ExistenceCheck = Callable[[str], bool]


def split_code_type(code_type: str) -> Tuple[str, bool]:
    """
    Découpe un type de code en (type de base, neuf ?).

    'New Apartment' -> ('Apartment', True)
    'Old House'     -> ('House', False)
    'Site'          -> ('Site', False)
    """
    code_type = code_type.strip()
    is_new = code_type.startswith("New")
    base_type = re.sub(r"^(New|Old)\s+", "", code_type)
    return base_type, is_new


def fallback_prefix(code_type: str) -> str:
    """Préfixe du code de repli ('PR' pour un type inconnu)"""
    for pattern, prefix in PREFIX_RULES:
        if pattern in code_type:
            return prefix
    return DEFAULT_PREFIX


def synthesize_fallback_code(code_type: str, now_ms: int, rand: int) -> str:
    """Code local : préfixe + 4 derniers chiffres de now_ms + rand sur 2 chiffres"""
    timestamp = str(now_ms)[-4:].zfill(4)
    return f"{fallback_prefix(code_type)}{timestamp}{rand % 100:02d}"


def _now_ms() -> int:
    return int(time.time() * 1000)


class PropertyCodeGenerator:
    """
    Propose un code propriété unique pour un type de code donné.

    Args:
        authoritative: fonction (base_type, is_new) -> code ou None, peut lever
        exists: fonction code -> bool, vraie si un bien porte déjà ce code
        max_check_retries: nouvelles tentatives si la vérification échoue
        backoff_seconds: attente de base entre deux tentatives (linéaire)
    """

    def __init__(
        self,
        authoritative: AuthoritativeGenerator,
        exists: ExistenceCheck,
        max_check_retries: int = 3,
        backoff_seconds: float = 0.2,
        clock: Callable[[], int] = _now_ms,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.authoritative = authoritative
        self.exists = exists
        self.max_check_retries = max_check_retries
        self.backoff_seconds = backoff_seconds
        self.clock = clock
        self.rng = rng or random.Random()
        self.sleep = sleep
        # Codes déjà proposés par cette instance
        self._issued: Set[str] = set()

    def generate(self, code_type: str) -> str:
        """
        Retourne un code non vide, absent de la base au moment de l'appel.

        Raises:
            ValueError: type de code vide
            PropertyCodeError: la vérification d'existence échoue durablement
        """
        if not code_type or not code_type.strip():
            raise ValueError("property_code_type est obligatoire")

        base_type, is_new = split_code_type(code_type)
        candidate = self._request_authoritative(base_type, is_new)

        if candidate:
            if not self._is_taken(candidate):
                logger.info(f"✓ Code propriété généré: {candidate}")
                return self._issue(candidate)
            logger.warning(f"Code {candidate} déjà utilisé, repli sur un code local")

        while True:
            candidate = synthesize_fallback_code(
                code_type, self.clock(), self.rng.randint(0, 99)
            )
            if not self._is_taken(candidate):
                logger.info(f"✓ Code de repli généré: {candidate}")
                return self._issue(candidate)
            logger.info(f"Code {candidate} déjà utilisé, nouveau tirage")

    def _request_authoritative(self, base_type: str, is_new: bool) -> Optional[str]:
        try:
            code = self.authoritative(base_type, is_new)
        except Exception as e:
            logger.error(f"✗ Erreur generate_property_code ({base_type}, neuf={is_new}): {e}")
            return None

        code = str(code).strip() if code else ""
        if not code:
            logger.warning(f"Aucun code renvoyé pour ({base_type}, neuf={is_new})")
            return None
        return code

    def _is_taken(self, code: str) -> bool:
        if code.upper() in self._issued:
            return True

        attempts = max(self.max_check_retries, 0) + 1
        for attempt in range(1, attempts + 1):
            try:
                return bool(self.exists(code))
            except Exception as e:
                logger.warning(
                    f"Vérification du code {code} en échec ({attempt}/{attempts}): {e}"
                )
                if attempt == attempts:
                    raise PropertyCodeError(
                        f"Impossible de vérifier l'unicité du code {code}"
                    ) from e
                self.sleep(self.backoff_seconds * attempt)

    def _issue(self, code: str) -> str:
        self._issued.add(code.upper())
        return code
