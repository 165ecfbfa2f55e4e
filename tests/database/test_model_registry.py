"""Key to model/seeder resolution."""

from cache_cascade.database import ModelRegistry
from tests.fixtures.models import TestModel, TestModelSeeder


def test_derived_names():
    assert ModelRegistry.model_name('faqs') == 'Faq'
    assert ModelRegistry.model_name('test_models') == 'TestModel'
    assert ModelRegistry.model_name('categories') == 'Category'
    assert ModelRegistry.seeder_name('faqs') == 'FaqSeeder'


def test_explicit_registration_wins():
    registry = ModelRegistry(model_namespace='tests.fixtures.models')

    class Other:
        pass

    registry.register('test_models', Other, seeder=TestModelSeeder)

    assert registry.model_for('test_models') is Other
    assert registry.seeder_for('test_models') is TestModelSeeder
    assert registry.keys() == ['test_models']

    registry.unregister('test_models')
    assert registry.model_for('test_models') is TestModel


def test_namespace_lookup():
    registry = ModelRegistry('tests.fixtures.models', 'tests.fixtures.models')

    assert registry.model_for('test_models') is TestModel
    assert registry.seeder_for('test_models') is TestModelSeeder


def test_unresolvable_keys():
    registry = ModelRegistry('tests.fixtures.models', 'tests.fixtures.models')

    assert registry.model_for('invoices') is None
    assert registry.seeder_for('invoices') is None
    assert ModelRegistry().model_for('test_models') is None
    assert ModelRegistry().seeder_for('test_models') is None
