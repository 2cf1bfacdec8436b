from factory import Faker, LazyFunction, SubFactory
from factory.django import DjangoModelFactory

from field_reports.models import (
    Child,
    ChildFieldNoteLink,
    Coordinator,
    CoordinatorFieldNote,
    Facilitator,
    FieldImage,
    FieldNote,
    GeneratedReport,
    LearningCentre,
)


class FacilitatorFactory(DjangoModelFactory):
    name = Faker("name")
    contact_number = Faker("numerify", text="##########")
    email = Faker("email")

    class Meta:
        model = Facilitator


class LearningCentreFactory(DjangoModelFactory):
    centre_name = Faker("company")
    area = Faker("street_name")
    city = Faker("city")
    district = "Pune"
    state = "Maharashtra"

    class Meta:
        model = LearningCentre


class ChildFactory(DjangoModelFactory):
    learning_centre = SubFactory(LearningCentreFactory)
    name = Faker("first_name")
    alias = LazyFunction(list)

    class Meta:
        model = Child


class CoordinatorFactory(DjangoModelFactory):
    name = Faker("name")

    class Meta:
        model = Coordinator


class GeneratedReportFactory(DjangoModelFactory):
    facilitator = SubFactory(FacilitatorFactory)
    learning_centre = SubFactory(LearningCentreFactory)
    month = 3
    year = 2024

    class Meta:
        model = GeneratedReport


class FieldNoteFactory(DjangoModelFactory):
    learning_centre = SubFactory(LearningCentreFactory)
    facilitator = SubFactory(FacilitatorFactory)
    text = Faker("sentence")
    sent_at = None

    class Meta:
        model = FieldNote


class FieldImageFactory(DjangoModelFactory):
    learning_centre = SubFactory(LearningCentreFactory)
    facilitator = SubFactory(FacilitatorFactory)
    url = Faker("image_url")
    sent_at = None

    class Meta:
        model = FieldImage


class CoordinatorFieldNoteFactory(DjangoModelFactory):
    coordinator = SubFactory(CoordinatorFactory)
    learning_centre = SubFactory(LearningCentreFactory)
    note_text = Faker("sentence")

    class Meta:
        model = CoordinatorFieldNote


class ChildFieldNoteLinkFactory(DjangoModelFactory):
    child = SubFactory(ChildFactory)
    field_note = None
    coordinator_field_note = None

    class Meta:
        model = ChildFieldNoteLink
