# solardevis/services/gemini_analysis.py

import logging
from typing import Any, Optional

import google.generativeai as genai

from solardevis.core.config import settings
from solardevis.models.quote import AnalysisResult, ClientProfile, QuoteConfig

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-1.5-flash"

FALLBACK_TEMPLATE = (
    "### ⚠️ Analyse indisponible\n\n"
    "Impossible de générer l'analyse automatique actuellement.\n\n"
    "**Raison probable :** {reason}"
)
REASON_MISSING_KEY = "La clé GEMINI_API_KEY n'a pas été détectée."
REASON_SERVICE_ERROR = "Erreur de communication avec le service Google AI."


def fallback_text(reason: str) -> str:
    return FALLBACK_TEMPLATE.format(reason=reason)


def build_prompt(profile: ClientProfile,
                 config: Optional[QuoteConfig] = None,
                 grand_total: Optional[float] = None) -> str:
    devices = "\n".join(
        f"- {i.device}: {i.hourly_kwh}kWh/h, {i.duration_h}h/j, Qte: {i.quantity}"
        for i in profile.items
    )
    prompt = f"""
En tant qu'expert en énergie solaire, analyse le profil de consommation suivant pour un client résidentiel.
Client: {profile.name}
Adresse: {profile.address}
Consommation journalière totale estimée: {profile.total_daily_kwh:.2f} kWh
Puissance de crête (tout allumé): {profile.total_max_w:g} W

Détails des appareils:
{devices}
"""
    if config is not None:
        prompt += f"""
Paramètres commerciaux:
- Marge sur matériel: {config.margin_percent:g}%
- Remise client: {config.discount_percent:g}%
- Coût installation: {config.install_cost:.2f} € HT
- Puissance panneau: {config.panel_wattage:g} W
"""
    if grand_total is not None:
        prompt += f"Montant total du devis: {grand_total:.2f} € TTC\n"

    prompt += """
Fournis une analyse professionnelle courte (en français) incluant:
1. Une évaluation de la pertinence d'une installation photovoltaïque.
2. Le dimensionnement conseillé (en kWc).
3. Un conseil spécifique sur la gestion des appareils.
4. Une estimation des économies annuelles potentielles.

Réponds en format Markdown structuré sans mentionner que tu es une IA.
"""
    return prompt


class QuoteAnalysisService:
    """
    Narrative analysis of a client profile, backed by Gemini.

    The key is passed in explicitly. Without one the service is disabled and
    every call returns the fallback message; the same happens when the model
    call fails. analyze() never raises.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None, model: Any = None):
        self.api_key = (api_key or "").strip()
        self.model_name = (model_name or "").strip() or DEFAULT_MODEL
        self._model = model

        if self._model is not None:
            self.enabled = True
            return

        if not self.api_key:
            logger.warning("GEMINI_API_KEY missing – quote analysis disabled")
            self.enabled = False
            return

        try:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
            self.enabled = True
            logger.info(f"Gemini analysis enabled. model={self.model_name}")
        except Exception as e:
            logger.warning(f"Gemini init failed, analysis disabled: {e}")
            self.enabled = False

    async def analyze(self,
                      profile: ClientProfile,
                      config: Optional[QuoteConfig] = None,
                      grand_total: Optional[float] = None) -> AnalysisResult:
        if not self.enabled or self._model is None:
            return AnalysisResult(text=fallback_text(REASON_MISSING_KEY), fallback=True)

        prompt = build_prompt(profile, config, grand_total)
        try:
            res = await self._model.generate_content_async(prompt)
            text = getattr(res, "text", "") or ""
        except Exception as e:
            logger.error(f"Gemini analysis failed for client={profile.name!r}: {e}")
            return AnalysisResult(text=fallback_text(REASON_SERVICE_ERROR), fallback=True)

        if not text.strip():
            logger.warning(f"Gemini returned an empty analysis for client={profile.name!r}")
            return AnalysisResult(text=fallback_text(REASON_SERVICE_ERROR), fallback=True)

        return AnalysisResult(text=text, fallback=False, model=self.model_name)


_analysis_singleton: Optional[QuoteAnalysisService] = None


def get_analysis_service() -> QuoteAnalysisService:
    global _analysis_singleton
    if _analysis_singleton is None:
        _analysis_singleton = QuoteAnalysisService(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL,
        )
    return _analysis_singleton


def reset_analysis_service() -> QuoteAnalysisService:
    """Rebuild the service from current settings."""
    global _analysis_singleton
    _analysis_singleton = None
    return get_analysis_service()
