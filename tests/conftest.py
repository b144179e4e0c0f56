import pytest

from shadowbench.utils.datasets import DatasetRegistry

ADULT_RECORDS = """age;sex;race;salary
25;Male;White;<=50K
27;Male;Black;>50K
31;Female;White;<=50K
33;Female;White;>50K
36;Male;Asian;<=50K
38;Male;White;<=50K
45;Female;Black;>50K
47;Female;White;<=50K
"""

ADULT_CONFIG = """age;continuous;TRUE;TRUE
sex;categorical;TRUE;TRUE
race;categorical;TRUE;FALSE
salary;categorical;FALSE;TRUE
"""

ADULT_AGE_HIERARCHY = """25;20-29;*
27;20-29;*
31;30-39;*
33;30-39;*
36;30-39;*
38;30-39;*
45;40-49;*
47;40-49;*
"""

ADULT_SEX_HIERARCHY = """Male;*
Female;*
"""


def write_adult(root, config: str = ADULT_CONFIG):
    data_dir = root / 'data'
    data_dir.mkdir(exist_ok=True)
    (data_dir / 'adult.csv').write_text(ADULT_RECORDS)
    (data_dir / 'adult.cfg').write_text(config)
    (data_dir / 'adult_hierarchy_age.csv').write_text(ADULT_AGE_HIERARCHY)
    (data_dir / 'adult_hierarchy_sex.csv').write_text(ADULT_SEX_HIERARCHY)
    return DatasetRegistry(root=str(root))


@pytest.fixture
def adult_registry(tmp_path):
    return write_adult(tmp_path)


@pytest.fixture
def adult_registry_with_config(tmp_path):
    def make(config: str):
        return write_adult(tmp_path, config)
    return make


@pytest.fixture
def adult_registry_at():
    return write_adult
