"""Demo data seeding tests."""

import importlib.util
from pathlib import Path

from gratiday.entities import Category, Quote, User

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "seed_demo_data.py"


def load_seed_module():
    spec = importlib.util.spec_from_file_location("seed_demo_data", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_seed_demo_data(db):
    """Seeding twice leaves exactly one copy of the demo data."""
    seed = load_seed_module()
    seed.seed_demo_data(db)
    seed.seed_demo_data(db)

    user = User.find_by_email(seed.DEMO_EMAIL, db=db)
    assert User.authenticate(seed.DEMO_EMAIL, seed.DEMO_PASSWORD, db=db).id_user == user.id_user
    assert Category.count(db=db) == 3

    stats = Quote.get_user_stats(user.id_user, db=db)
    assert stats.total_frases == 4
    assert stats.frases_publicadas == 2
    assert stats.frases_borrador == 1
    assert stats.frases_programadas == 1
