import os
import sys
import pathlib

import pytest

# Ensure the project root is importable so `import solardevis` works
ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Never talk to Google from the test suite, whatever the developer's shell has.
os.environ["GEMINI_API_KEY"] = ""
os.environ["GOOGLE_SOLAR_API_KEY"] = ""

# Prevent pydantic-settings from reading a developer .env during tests.
try:
    import pydantic_settings.sources as _psources
    _psources.DotEnvSettingsSource._read_env_files = lambda self, *args, **kwargs: {}
except (ImportError, AttributeError):
    # If pydantic-settings internals change, don't fail tests at import time.
    pass


HEADER = "Client;Lieu;Adresse;Date;Agent;Appareil;Puissance horaire (kWh);Puissance max (W);Duree (h/j);Quantite"


@pytest.fixture
def audit_csv() -> str:
    rows = [
        HEADER,
        '"Jean Dupont";Maison;"12 rue des Palmiers";2024-05-02;Marie;Réfrigérateur;0,15;150;24;1',
        "Jean Dupont;Maison;12 rue des Palmiers;2024-05-02;Marie;Ampoule LED;0,01;10;6;8",
        "Société Soleil;Bureau;Zone industrielle;2024-05-03;Paul;Ordinateur;0,2;200;8;5",
        "Jean Dupont;Garage;12 rue des Palmiers;2024-06-01;Paul;Pompe;0,75;750;2;1",
    ]
    return "\r\n".join(rows) + "\r\n"
