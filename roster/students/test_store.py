"""Unit tests for the roster store."""

import pytest
from pydantic import ValidationError

from roster.catalog.schemas import Course
from roster.students.schemas import Student
from .store import RosterStore, compute_analytics


def make_student(student_id, course_id=3, course_name="JavaScript Pro", is_active=True):
    return Student(
        id=student_id,
        student_id=f"STU{student_id.zfill(3)}",
        name=f"Student {student_id}",
        email=f"student{student_id}@email.com",
        phone="+1 (555) 000-0000",
        course_id=course_id,
        course_name=course_name,
        profile_image=f"blob:{student_id}",
        is_active=is_active,
        enrollment_date="2024-03-01T10:00:00.000Z",
    )


def assert_analytics_consistent(store):
    analytics = store.analytics
    assert analytics.active_students + analytics.inactive_students == analytics.total_students
    assert sum(analytics.course_stats.values()) == analytics.total_students
    assert analytics.total_students == len(store.all_students)


class TestReferenceScenario:
    """The seeded roster walked through toggle, add and filter."""

    def test_seed_analytics(self):
        """Test analytics of the two reference students."""
        store = RosterStore.with_mock_data()
        analytics = store.analytics

        assert analytics.total_students == 2
        assert analytics.active_students == 2
        assert analytics.inactive_students == 0
        assert analytics.course_stats == {"React In Depth": 1, "JavaScript Pro": 1}

    def test_toggle_add_and_filter(self):
        """Test the full toggle / add / filter walkthrough."""
        store = RosterStore.with_mock_data()

        store.toggle_student_status("1")
        analytics = store.analytics
        assert analytics.active_students == 1
        assert analytics.inactive_students == 1
        assert analytics.course_stats == {"React In Depth": 1, "JavaScript Pro": 1}

        third = make_student("3", course_id=3, course_name="JavaScript Pro")
        store.add_student(third)
        analytics = store.analytics
        assert analytics.total_students == 3
        assert analytics.course_stats["JavaScript Pro"] == 2

        store.set_selected_course_id(3)
        assert [s.id for s in store.students] == ["2", "3"]
        assert store.students[0].name == "Michael Chen"


class TestAddStudent:
    """Test cases for add_student."""

    def test_add_appends_in_order(self):
        """Test that records are kept in insertion order."""
        store = RosterStore()
        for student_id in ["a", "b", "c"]:
            store.add_student(make_student(student_id))

        assert [s.id for s in store.all_students] == ["a", "b", "c"]

    def test_added_record_is_retrievable_intact(self):
        """Test that every field survives the round trip through the store."""
        store = RosterStore()
        student = make_student("42", course_id=1, course_name="HTML Basics", is_active=False)
        store.add_student(student)

        assert store.get_student("42") == student
        assert store.get_student("missing") is None

    def test_add_keeps_existing_records(self):
        """Test that earlier records are untouched by an add."""
        store = RosterStore.with_mock_data()
        before = store.all_students

        store.add_student(make_student("3"))

        assert store.all_students[:2] == before
        assert len(store.all_students) == 3

    def test_add_is_visible_in_filtered_view(self):
        """Test that a matching new record shows up under the current filter."""
        store = RosterStore.with_mock_data()
        store.set_selected_course_id(4)

        store.add_student(make_student("3", course_id=4, course_name="React In Depth"))
        store.add_student(make_student("4", course_id=1, course_name="HTML Basics"))

        assert [s.id for s in store.students] == ["1", "3"]

    def test_all_students_is_a_copy(self):
        """Test that callers cannot change the roster through the returned list."""
        store = RosterStore.with_mock_data()
        students = store.all_students
        students.clear()

        assert len(store.all_students) == 2


class TestUpdateStudent:
    """Test cases for update_student."""

    def test_update_replaces_in_place(self):
        """Test that the updated record keeps its position."""
        store = RosterStore.with_mock_data()
        store.add_student(make_student("3"))
        original = store.get_student("1")

        updated = original.model_copy(update={"name": "Sarah J. Smith", "course_id": 2,
                                              "course_name": "CSS Mastery"})
        store.update_student(updated)

        assert [s.id for s in store.all_students] == ["1", "2", "3"]
        assert store.get_student("1").name == "Sarah J. Smith"
        assert store.analytics.course_stats == {"CSS Mastery": 1, "JavaScript Pro": 2}

    def test_update_is_a_straight_overwrite(self):
        """Test that the store does not special-case enrollment_date."""
        store = RosterStore.with_mock_data()
        updated = store.get_student("2").model_copy(update={"enrollment_date": "2030-01-01"})

        store.update_student(updated)

        assert store.get_student("2").enrollment_date == "2030-01-01"

    def test_update_unknown_id_is_noop(self):
        """Test that updating an unknown id leaves the roster unchanged."""
        store = RosterStore.with_mock_data()
        before = store.all_students

        store.update_student(make_student("999"))

        assert store.all_students == before


class TestToggleStudentStatus:
    """Test cases for toggle_student_status."""

    def test_toggle_flips_only_is_active(self):
        """Test that only is_active changes."""
        store = RosterStore.with_mock_data()
        original = store.get_student("2")

        store.toggle_student_status("2")
        toggled = store.get_student("2")

        assert toggled.is_active is False
        assert toggled.model_dump(exclude={"is_active"}) == original.model_dump(exclude={"is_active"})

    def test_toggle_twice_restores_status(self):
        """Test that toggling is an involution."""
        store = RosterStore.with_mock_data()
        before = store.all_students

        store.toggle_student_status("1")
        store.toggle_student_status("1")

        assert store.all_students == before

    def test_toggle_unknown_id_is_noop(self):
        """Test that toggling an unknown id leaves the roster unchanged."""
        store = RosterStore.with_mock_data()
        before = [s.model_dump_json() for s in store.all_students]

        store.toggle_student_status("does-not-exist")

        assert [s.model_dump_json() for s in store.all_students] == before

    def test_records_are_immutable(self):
        """Test that records cannot be edited behind the store's back."""
        store = RosterStore.with_mock_data()

        with pytest.raises(ValidationError):
            store.get_student("1").is_active = False


class TestFilteredView:
    """Test cases for the course selection and filtered view."""

    def test_no_selection_shows_everyone(self):
        """Test that the default view equals all_students."""
        store = RosterStore.with_mock_data()

        assert store.selected_course_id is None
        assert store.students == store.all_students

    def test_selection_filters_preserving_order(self):
        """Test the subsequence for a selected course."""
        store = RosterStore()
        for student_id, course_id in [("a", 1), ("b", 2), ("c", 1), ("d", 3), ("e", 1)]:
            store.add_student(make_student(student_id, course_id=course_id))

        store.set_selected_course_id(1)

        assert [s.id for s in store.students] == ["a", "c", "e"]

    def test_clearing_selection_restores_all(self):
        """Test that None restores the full list."""
        store = RosterStore.with_mock_data()
        store.set_selected_course_id(3)
        store.set_selected_course_id(None)

        assert store.students == store.all_students

    def test_unknown_course_yields_empty_view(self):
        """Test that an unknown course id filters everything out."""
        store = RosterStore.with_mock_data()
        store.set_selected_course_id(99)

        assert store.students == []

    def test_view_follows_toggle(self):
        """Test that the filtered view is never stale after a mutation."""
        store = RosterStore.with_mock_data()
        store.set_selected_course_id(3)
        store.toggle_student_status("2")

        assert store.students[0].is_active is False

    def test_selection_does_not_affect_analytics(self):
        """Test that analytics are computed over the whole roster."""
        store = RosterStore.with_mock_data()
        before = store.analytics

        store.set_selected_course_id(3)

        assert store.analytics == before
        assert store.analytics.total_students == 2

    def test_students_by_course_ignores_selection(self):
        """Test per-course lookup independent of the cursor."""
        store = RosterStore.with_mock_data()
        store.set_selected_course_id(3)

        assert [s.id for s in store.students_by_course(4)] == ["1"]

    def test_course_counts(self):
        """Test student counts for every catalog course."""
        store = RosterStore.with_mock_data()
        courses = [Course(id=1, name="HTML Basics"), Course(id=3, name="JavaScript Pro"),
                   Course(id=4, name="React In Depth")]

        assert store.course_counts(courses) == {1: 0, 3: 1, 4: 1}


class TestAnalytics:
    """Test cases for the derived analytics."""

    def test_invariants_hold_after_every_mutation(self):
        """Test count consistency across a mixed sequence of mutations."""
        store = RosterStore.with_mock_data()
        assert_analytics_consistent(store)

        store.add_student(make_student("3", course_id=1, course_name="HTML Basics"))
        assert_analytics_consistent(store)
        store.toggle_student_status("3")
        assert_analytics_consistent(store)
        store.update_student(make_student("1", course_id=2, course_name="CSS Mastery",
                                          is_active=False))
        assert_analytics_consistent(store)
        store.toggle_student_status("unknown")
        assert_analytics_consistent(store)

        analytics = store.analytics
        assert analytics.total_students == 3
        assert analytics.active_students == 1
        assert analytics.course_stats == {"CSS Mastery": 1, "JavaScript Pro": 1, "HTML Basics": 1}

    def test_buckets_by_course_name_not_id(self):
        """Test that two course ids sharing a name merge into one bucket."""
        analytics = compute_analytics([
            make_student("a", course_id=3, course_name="JavaScript Pro"),
            make_student("b", course_id=7, course_name="JavaScript Pro"),
        ])

        assert analytics.course_stats == {"JavaScript Pro": 2}

    def test_empty_roster(self):
        """Test analytics of an empty roster."""
        analytics = RosterStore().analytics

        assert analytics.total_students == 0
        assert analytics.course_stats == {}
        assert analytics.active_percentage == 0.0
        assert analytics.inactive_percentage == 0.0
        assert analytics.max_course_enrollment == 1

    def test_percentages(self):
        """Test derived percentages and the largest course bucket."""
        store = RosterStore.with_mock_data()
        store.add_student(make_student("3"))
        store.add_student(make_student("4", is_active=False))
        store.toggle_student_status("1")

        analytics = store.analytics
        assert analytics.active_percentage == 50.0
        assert analytics.inactive_percentage == 50.0
        assert analytics.max_course_enrollment == 3

    def test_returned_course_stats_do_not_leak_into_store(self):
        """Test that editing a returned analytics value leaves the roster figures intact."""
        store = RosterStore.with_mock_data()

        store.analytics.course_stats["React In Depth"] = 99
        store.analytics.course_stats.clear()

        analytics = store.analytics
        assert sum(analytics.course_stats.values()) == analytics.total_students
        assert analytics.course_stats == {"React In Depth": 1, "JavaScript Pro": 1}
        assert analytics.max_course_enrollment == 1

    def test_analytics_recomputed_after_add(self):
        """Test that a cached analytics value is dropped on mutation."""
        store = RosterStore.with_mock_data()
        assert store.analytics.total_students == 2

        store.add_student(make_student("3"))

        assert store.analytics.total_students == 3

    def test_serialized_shape(self):
        """Test the dumped analytics, computed fields included."""
        data = RosterStore.with_mock_data().analytics.model_dump()

        assert data == {
            "total_students": 2,
            "active_students": 2,
            "inactive_students": 0,
            "course_stats": {"React In Depth": 1, "JavaScript Pro": 1},
            "active_percentage": 100.0,
            "inactive_percentage": 0.0,
            "max_course_enrollment": 1,
        }


class TestIdentity:
    """Test cases for store-owned id generation."""

    def test_new_ids_are_unique(self):
        """Test that rapid successive ids never collide."""
        ids = {RosterStore.new_student_id() for _ in range(1000)}

        assert len(ids) == 1000
        assert all(len(student_id) == 32 for student_id in ids)

    def test_distinct_adds_grow_roster(self):
        """Test that N adds with fresh ids give N retrievable records."""
        store = RosterStore()
        added = []
        for _ in range(25):
            student = make_student(store.new_student_id())
            store.add_student(student)
            added.append(student)

        assert len(store.all_students) == 25
        for student in added:
            assert store.get_student(student.id) == student
