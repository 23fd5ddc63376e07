import pytest

from injectable.domain import CollectionReturn, SingleReturn
from injectable.errors import DeclarationError, NilNotAllowedError, TypeMismatchError
from injectable.validators import (
    make_return_spec,
    validate_argument_declaration,
    validate_argument_type,
    validate_collection_return,
    validate_returns,
    validate_single_return,
)


class User:
    pass


class Admin(User):
    pass


class MyCollection:
    def __iter__(self):
        yield 1
        yield 2


def test_argument_declaration_without_type_passes():
    validate_argument_declaration("foo", None, 1)


def test_argument_declaration_type_must_be_a_class():
    with pytest.raises(DeclarationError, match=":type for argument foo must be a class"):
        validate_argument_declaration("foo", 123)


def test_argument_declaration_default_must_match_type():
    with pytest.raises(DeclarationError, match="default for argument foo is a int, needs to be a str"):
        validate_argument_declaration("foo", str, 1)


def test_argument_declaration_matching_default_passes():
    validate_argument_declaration("foo", int, 1)
    validate_argument_declaration("foo", User, None)


def test_argument_type_allows_no_type():
    validate_argument_type("name", None, "hello")


def test_argument_type_accepts_declared_type_and_subtypes():
    validate_argument_type("name", str, "hello")
    validate_argument_type("user", User, Admin())


def test_argument_type_allows_none():
    validate_argument_type("count", int, None)


def test_argument_type_mismatch_raises():
    with pytest.raises(TypeMismatchError, match="argument items passed is a int, needs to be a list"):
        validate_argument_type("items", list, 123)


def test_single_return_accepts_correct_type():
    validate_single_return(str, False, "hello")
    validate_single_return(User, False, Admin())


def test_single_return_wrong_type_raises():
    with pytest.raises(TypeMismatchError, match="return value is a int, needs to be a str"):
        validate_single_return(str, False, 123)


def test_single_return_none_when_not_nullable_raises():
    with pytest.raises(NilNotAllowedError, match="return value is None, expected str"):
        validate_single_return(str, False, None)


def test_single_return_none_when_nullable_passes():
    validate_single_return(str, True, None)


def test_collection_return_accepts_correct_elements():
    validate_collection_return(list, int, False, False, [1, 2, 3])


def test_collection_return_wrong_element_type_raises():
    with pytest.raises(TypeMismatchError, match="return collection contains a str, needs elements of int"):
        validate_collection_return(list, int, False, False, [1, "a"])


def test_collection_return_none_when_not_nullable_raises():
    with pytest.raises(NilNotAllowedError, match="return value is None, expected a list of int"):
        validate_collection_return(list, int, False, False, None)


def test_collection_return_none_when_nullable_passes():
    validate_collection_return(list, int, True, False, None)


def test_collection_return_none_element_when_not_allowed_raises():
    with pytest.raises(NilNotAllowedError, match="collection contains None but allow_nils is False"):
        validate_collection_return(list, int, False, False, [1, None])


def test_collection_return_none_element_when_allowed_passes():
    validate_collection_return(list, int, False, True, [1, None])


def test_collection_return_wrong_collection_type_raises():
    with pytest.raises(TypeMismatchError, match="return value is a int, needs to be a list of int"):
        validate_collection_return(list, int, False, False, 123)


def test_collection_return_accepts_any_iterable_collection_class():
    validate_collection_return(MyCollection, int, False, False, MyCollection())


def test_validate_returns_dispatches_on_spec():
    validate_returns(None, object())
    validate_returns(SingleReturn(User), Admin())
    validate_returns(CollectionReturn(tuple, User, allow_nils=True), (User(), None))

    with pytest.raises(NilNotAllowedError):
        validate_returns(SingleReturn(User), None)
    with pytest.raises(TypeMismatchError):
        validate_returns(CollectionReturn(list, User), [User(), 1])


def test_validate_returns_rejects_unknown_spec():
    with pytest.raises(DeclarationError, match="unknown return spec kind"):
        validate_returns("single", 1)


def test_make_return_spec():
    assert make_return_spec(User) == SingleReturn(User, False)
    assert make_return_spec(User, nullable=True) == SingleReturn(User, True)
    assert make_return_spec(list, of=User, allow_nils=True) == CollectionReturn(list, User, False, True)


def test_make_return_spec_requires_classes():
    with pytest.raises(DeclarationError, match=":type for returns must be a class"):
        make_return_spec("User")
    with pytest.raises(DeclarationError, match=":of for returns must be a class"):
        make_return_spec(list, of="User")
    with pytest.raises(DeclarationError, match=":collection for returns must be a class"):
        make_return_spec([], of=User)


def test_make_return_spec_requires_iterable_collection():
    with pytest.raises(DeclarationError, match="User is not a collection-like class"):
        make_return_spec(User, of=int)
