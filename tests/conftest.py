from __future__ import annotations

import pytest

from gostdoc.decls import TypeDecl, field_decl
from gostdoc.typeexpr import Map, Named, Pointer, Qualified, Slice


@pytest.fixture
def user_decls() -> list[TypeDecl]:
    # Shapes of:
    #
    #   type User struct {
    #       *pkg.Base
    #       ID   int64   `json:"id,omitempty" db:"id"` // primary key
    #       First, Last string
    #       Tags []*Tag
    #       Meta map[string]*Bar
    #   }
    #   type UserList []User
    #   type UserParams struct { Q string }
    return [
        TypeDecl(
            name="User",
            fields=(
                field_decl(names=[], type=Pointer(Qualified(Named("pkg"), Named("Base")))),
                field_decl(
                    names=["ID"],
                    type=Named("int64"),
                    tag='json:"id,omitempty" db:"id"',
                    doc="primary key\n",
                ),
                field_decl(names=["First", "Last"], type=Named("string")),
                field_decl(names=["Tags"], type=Slice(Pointer(Named("Tag")))),
                field_decl(names=["Meta"], type=Map(Named("string"), Pointer(Named("Bar")))),
            ),
        ),
        TypeDecl(name="UserList", is_struct=False),
        TypeDecl(name="UserParams", fields=(field_decl(names=["Q"], type=Named("string")),)),
    ]
