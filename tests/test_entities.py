from tidyini import (
    Container,
    DuplicateEntityError,
    EntityNotFound,
    InvalidArgument,
    Property,
    PropertyGroup,
    Section,
    SectionGroup,
    normalize,
)
from tidyini.entities import _Scope
import pytest
import time

invalid_names = ["", "   ", "\t\n", None, 5]


class TestProperty:

    @pytest.mark.parametrize("name", invalid_names)
    def test_invalid_name(self, name):
        with pytest.raises(InvalidArgument):
            Property(name, "value")

    def test_name_is_read_only(self):
        prop = Property("key", "value")
        with pytest.raises(AttributeError):
            prop.name = "other"  # type: ignore[misc]

    def test_value_is_mutable(self):
        prop = Property("key")
        prop.value = "value"
        assert prop.value == "value"

    def test_missing_and_empty_value_are_distinct(self):
        assert Property("key").value is None
        assert Property("key", "").value == ""
        assert Property("key") != Property("key", "")

    @pytest.mark.parametrize("value", [1, 1.5, ["a"], b"bytes"])
    def test_value_must_be_text(self, value):
        with pytest.raises(InvalidArgument):
            Property("key", value)

    @pytest.mark.parametrize(
        "value,empty",
        [(None, True), ("", True), ("  \t", True), ("0", False), (" x ", False)],
    )
    def test_is_empty(self, value, empty):
        assert Property("key", value).is_empty is empty

    @pytest.mark.parametrize(
        "value,delimiter,result",
        [
            ("val", "=", "key=val"),
            ("val", " = ", "key = val"),
            ("val", ":", "key:val"),
            (None, "=", "key="),
            ("", "=", "key="),
        ],
    )
    def test_to_string(self, value, delimiter, result):
        assert Property("key", value).to_string(delimiter) == result

    def test_copy_is_independent(self):
        prop = Property("key", "value")
        copied = prop.copy()
        copied.value = "changed"
        assert prop.value == "value"
        assert copied == Property("key", "changed")


class TestSection:

    @pytest.mark.parametrize("name", invalid_names)
    def test_invalid_name(self, name):
        with pytest.raises(InvalidArgument):
            Section(name)

    def test_new_section_is_empty(self):
        section = Section("main")
        assert section.is_empty
        assert section.comments == []
        assert section.properties == []

    def test_comments_keep_order_and_duplicates(self):
        section = Section("main", comments=["b", "a", "b"])
        section.add_comment("a")
        assert section.comments == ["b", "a", "b", "a"]
        assert not section.is_empty

    def test_only_comments_is_not_empty(self):
        assert not Section("main", comments=[""]).is_empty

    def test_add_and_get_property(self):
        section = Section("main")
        prop = section.add_property("key", "value")
        assert section.get_property("key") is prop
        assert "key" in section.properties
        assert section.properties.names() == ["key"]

    def test_get_missing_property(self):
        with pytest.raises(EntityNotFound) as e:
            Section("main").get_property("key")
        assert isinstance(e.value, KeyError)

    def test_set_property(self):
        section = Section("main")
        section.add_property("a", "1")
        section.set_property("a", "2")
        section.set_property("b", "3")
        assert section.properties == [Property("a", "2"), Property("b", "3")]

    @pytest.mark.parametrize(
        "mutation",
        [
            lambda props: props.append(Property("a", "2")),
            lambda props: props.insert(0, Property("a")),
            lambda props: props.extend([Property("b"), Property("a")]),
            lambda props: props.__iadd__([Property("a")]),
            lambda props: props.__setitem__(1, Property("a")),
            lambda props: props.__setitem__(slice(1, None), [Property("a")]),
        ],
    )
    def test_duplicate_property_names_are_rejected(self, mutation):
        section = Section("main", properties=[Property("a", "1"), Property("c", "3")])
        with pytest.raises(DuplicateEntityError):
            mutation(section.properties)
        assert section.properties.names() == ["a", "c"]

    def test_duplicate_on_construction(self):
        with pytest.raises(DuplicateEntityError):
            Section("main", properties=[Property("a"), Property("a", "1")])

    def test_duplicate_on_assignment(self):
        section = Section("main")
        with pytest.raises(DuplicateEntityError):
            section.properties = [Property("a"), Property("a", "1")]

    def test_replace_property_in_place(self):
        section = Section("main", properties=[Property("a", "1")])
        section.properties[0] = Property("a", "2")
        assert section.get_property("a").value == "2"

    def test_only_properties_can_be_added(self):
        with pytest.raises(InvalidArgument):
            Section("main").properties.append("a=1")  # type: ignore[arg-type]

    def test_equality(self):
        assert Section("main", ["c"], [Property("a", "1")]) == Section(
            "main", ["c"], [Property("a", "1")]
        )
        assert Section("main") != Section("other")


class TestContainer:

    def test_new_container_is_empty(self):
        assert Container().is_empty

    @pytest.mark.parametrize(
        "container",
        [
            Container(global_comments=[""]),
            Container(global_properties=[Property("a")]),
            Container(sections=[Section("main")]),
        ],
    )
    def test_not_empty(self, container):
        assert not container.is_empty

    def test_sections(self):
        container = Container()
        first = container.add_section("first")
        second = container.add_section("second")
        assert container.sections == [first, second]
        assert container.get_section("second") is second
        assert "first" in container.sections

    def test_duplicate_section_names_are_rejected(self):
        container = Container()
        container.add_section("main")
        with pytest.raises(DuplicateEntityError):
            container.add_section("main")
        with pytest.raises(DuplicateEntityError):
            container.sections.append(Section("main"))

    def test_get_missing_section(self):
        with pytest.raises(EntityNotFound):
            Container().get_section("main")

    def test_global_scope(self):
        container = Container()
        container.add_comment("comment")
        container.add_property("a", "1")
        container.set_property("a", "2")
        assert container.global_comments == ["comment"]
        assert container.get_property("a").value == "2"
        with pytest.raises(DuplicateEntityError):
            container.add_property("a")

    def test_same_property_name_in_different_scopes(self):
        container = Container()
        container.add_property("a", "global")
        container.add_section("main").add_property("a", "section")
        assert container.get_property("a").value == "global"
        assert container.get_section("main").get_property("a").value == "section"



class TestNamedGroup:

    def test_scope_is_abstract(self):
        with pytest.raises(TypeError):
            _Scope()  # type: ignore[abstract]

    @pytest.mark.parametrize("factor", [2, 3])
    def test_repeat_is_rejected(self, factor):
        section = Section("main", properties=[Property("a", "1"), Property("c", "3")])
        props = section.properties
        with pytest.raises(DuplicateEntityError):
            props *= factor
        assert section.properties.names() == ["a", "c"]

    def test_repeat_through_alias_is_rejected(self):
        container = Container(global_properties=[Property("a", "1")])
        group = container.global_properties
        with pytest.raises(DuplicateEntityError):
            group *= 2
        assert container.global_properties.names() == ["a"]

    def test_repeat_once_or_never(self):
        section = Section("main", properties=[Property("a", "1")])
        props = section.properties
        props *= 1
        assert section.properties.names() == ["a"]
        props *= 0
        assert section.properties == []
        section.add_property("a", "2")
        assert section.get_property("a").value == "2"

    def test_repeat_empty_group(self):
        props = PropertyGroup()
        props *= 5
        assert props == []

    @pytest.mark.parametrize(
        "removal",
        [
            lambda props: props.pop(0),
            lambda props: props.remove(props[0]),
            lambda props: props.__delitem__(0),
            lambda props: props.__delitem__(slice(0, 1)),
            lambda props: props.clear(),
        ],
    )
    def test_removed_names_can_be_added_again(self, removal):
        section = Section("main", properties=[Property("a", "1"), Property("b", "2")])
        removal(section.properties)
        assert "a" not in section.properties
        assert section.properties.get("a") is None
        section.add_property("a", "new")
        assert section.get_property("a").value == "new"

    def test_replaced_name_is_reindexed(self):
        section = Section("main", properties=[Property("a", "1"), Property("b", "2")])
        section.properties[0] = Property("c", "3")
        assert "a" not in section.properties
        assert section.get_property("c").value == "3"
        section.add_property("a")
        assert section.properties.names() == ["c", "b", "a"]

    def test_copy_keeps_group_type(self):
        props = PropertyGroup([Property("a", "1")])
        sections = SectionGroup([Section("main")])
        for group, kind in ((props, PropertyGroup), (sections, SectionGroup)):
            copied = group.copy()
            assert type(copied) is kind
            assert copied == group
        copied = props.copy()
        with pytest.raises(DuplicateEntityError):
            copied.append(Property("a"))
        copied.append(Property("b"))
        assert props.names() == ["a"]

    def test_large_groups_are_fast(self):
        count = 10_000
        start = time.perf_counter()
        section = Section(
            "main",
            properties=[
                Property(f"key{i}", str(i) if i % 2 else "") for i in range(count)
            ],
        )
        for i in range(count):
            section.set_property(f"key{i}", f"value{i}")
        normalized = normalize(Container(sections=[section]))
        elapsed = time.perf_counter() - start
        properties = normalized.get_section("main").properties
        assert len(properties) == count
        assert "key9999" in properties
        assert elapsed < 2
