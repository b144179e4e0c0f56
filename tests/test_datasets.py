import pandas as pd
import pytest

from shadowbench.utils.datasets import AttributeDefinition, AttributeType, Data, DataDefinition, DataType, \
    Hierarchy, MicroAggregationFunction


@pytest.mark.parametrize("value, expected", [(35.25, '35.2'), ('40', '40'), (39.96, '40'), (0.04, '0'),
                                             (12.5, '12.5')])
def test_decimal_format(value, expected):
    assert DataType.decimal('#.#', 'en_US').format_value(value) == expected


def test_string_format():
    assert DataType.STRING.format_value('Male') == 'Male'
    assert not DataType.STRING.is_decimal


def test_hierarchy():
    hierarchy = Hierarchy(pd.DataFrame([['25', '20-29', '*'], ['31', '30-39', '*']]))

    assert hierarchy.height == 3
    assert hierarchy.values() == ['25', '31']
    assert hierarchy.generalize('31', 0) == '31'
    assert hierarchy.generalize('31', 1) == '30-39'
    assert hierarchy.generalize('25', 2) == '*'
    assert hierarchy.level_mapping(1) == {'25': '20-29', '31': '30-39'}
    with pytest.raises(KeyError):
        hierarchy.generalize('99', 1)


def test_hierarchy_equality():
    first = Hierarchy(pd.DataFrame([['Male', '*'], ['Female', '*']]))
    second = Hierarchy(pd.DataFrame([['Male', '*'], ['Female', '*']]))
    other = Hierarchy(pd.DataFrame([['Male', 'Person'], ['Female', 'Person']]))

    assert first == second
    assert first != other


def test_empty_hierarchy():
    with pytest.raises(ValueError):
        Hierarchy(pd.DataFrame())


def test_arithmetic_mean():
    mean = MicroAggregationFunction.arithmetic_mean()

    assert mean.aggregate(['30', '34']) == 32.0
    assert mean == MicroAggregationFunction.arithmetic_mean()


def test_data_definition():
    hierarchy = Hierarchy(pd.DataFrame([['Male', '*'], ['Female', '*']]))
    definition = DataDefinition()
    definition.set_attribute('sex', AttributeDefinition(DataType.STRING, AttributeType.QUASI_IDENTIFYING, hierarchy))
    definition.set_attribute('race', AttributeDefinition(DataType.STRING, AttributeType.INSENSITIVE))

    assert definition.names == ['sex', 'race']
    assert definition.quasi_identifiers == ['sex']
    assert definition.insensitive_attributes == ['race']
    assert 'sex' in definition
    assert definition.get('salary') is None


def test_quasi_identifier_requires_hierarchy():
    definition = DataDefinition()
    with pytest.raises(ValueError):
        definition.set_attribute('sex', AttributeDefinition(DataType.STRING, AttributeType.QUASI_IDENTIFYING))


def test_data_requires_defined_columns():
    definition = DataDefinition()
    definition.set_attribute('race', AttributeDefinition(DataType.STRING, AttributeType.INSENSITIVE))

    with pytest.raises(ValueError):
        Data(pd.DataFrame({'sex': ['Male']}), definition)


def test_data_equality():
    frame = pd.DataFrame({'sex': ['Male', 'Female']})
    data = Data(frame, name='ADULT')
    copy = data.copy()

    assert data == copy
    copy.frame.loc[0, 'sex'] = 'Female'
    assert data != copy
    assert data.features_names == ['sex']
    assert len(data) == 2
