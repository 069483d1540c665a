from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.services.pedigree_resolver import PedigreeResolver, UnknownReason
from src.application.use_cases.pedigree import (
    add_external_ancestor,
    link_parent,
    resolve_ancestors,
)
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.gender import Gender
from src.domain.value_objects.parent_role import ParentRole
from tests.unit.factories import make_animal


@pytest.mark.asyncio
async def test_link_parent_sets_reference(repo, uow):
    lamb = await repo.add(make_animal("Lamb", "LD-010", birth_date=date(2024, 1, 1)))
    ram = await repo.add(make_animal("Bandit", "LD-002", Gender.MALE))

    updated = await link_parent.execute(
        uow, link_parent.LinkParentInput(child_id=lamb.id, role=ParentRole.SIRE, parent_id=ram.id)
    )
    assert updated.sire_id == ram.id
    assert updated.version == 2
    assert uow.calls["commit"] == 1


@pytest.mark.asyncio
async def test_link_parent_rejects_wrong_gender(repo, uow):
    lamb = await repo.add(make_animal("Lamb", "LD-010"))
    ewe = await repo.add(make_animal("Awa", "LD-003", Gender.FEMALE))
    with pytest.raises(ValidationError):
        await link_parent.execute(
            uow,
            link_parent.LinkParentInput(child_id=lamb.id, role=ParentRole.SIRE, parent_id=ewe.id),
        )
    assert repo.update_calls == []


@pytest.mark.asyncio
async def test_link_parent_rejects_self(repo, uow):
    lamb = await repo.add(make_animal("Lamb", "LD-010"))
    with pytest.raises(ValidationError):
        await link_parent.execute(
            uow,
            link_parent.LinkParentInput(child_id=lamb.id, role=ParentRole.DAM, parent_id=lamb.id),
        )


@pytest.mark.asyncio
async def test_link_parent_missing_parent(repo, uow):
    lamb = await repo.add(make_animal("Lamb", "LD-010"))
    with pytest.raises(NotFound):
        await link_parent.execute(
            uow,
            link_parent.LinkParentInput(child_id=lamb.id, role=ParentRole.DAM, parent_id=uuid4()),
        )


@pytest.mark.asyncio
async def test_link_parent_rejects_cycle(repo, uow):
    grand = await repo.add(make_animal("Grand", "LD-100", Gender.MALE))
    father = await repo.add(make_animal("Father", "LD-101", Gender.MALE, sire_id=grand.id))
    son = await repo.add(make_animal("Son", "LD-102", Gender.MALE, sire_id=father.id))

    # the grandsire cannot become the grandson's child
    with pytest.raises(ValidationError):
        await link_parent.execute(
            uow,
            link_parent.LinkParentInput(child_id=grand.id, role=ParentRole.SIRE, parent_id=son.id),
        )
    assert repo.items[grand.id].sire_id is None


@pytest.mark.asyncio
async def test_link_parent_stale_child_raises_conflict(repo, uow):
    lamb = await repo.add(make_animal("Lamb", "LD-010"))
    ewe = await repo.add(make_animal("Awa", "LD-003"))
    repo.stale_for.add(lamb.id)
    with pytest.raises(ConflictError):
        await link_parent.execute(
            uow,
            link_parent.LinkParentInput(child_id=lamb.id, role=ParentRole.DAM, parent_id=ewe.id),
        )


@pytest.mark.asyncio
async def test_add_external_ancestor_creates_and_links(repo, uow):
    lamb = await repo.add(make_animal("Lamb", "LD-010", breed="Ladoum"))
    result = await add_external_ancestor.execute(
        uow,
        add_external_ancestor.AddExternalAncestorInput(
            child_id=lamb.id, role=ParentRole.SIRE, name="Tabaski Star"
        ),
    )
    ancestor = result.ancestor
    assert ancestor.status == AnimalStatus.EXTERNAL
    assert ancestor.gender == Gender.MALE
    assert ancestor.breed == "Ladoum"
    assert ancestor.birth_date == add_external_ancestor.APPROXIMATE_BIRTH_DATE
    assert ancestor.tag_id.startswith("EXT-")
    assert result.child.sire_id == ancestor.id
    assert ancestor.id in repo.items


@pytest.mark.asyncio
async def test_add_external_ancestor_unknown_child(uow):
    with pytest.raises(NotFound):
        await add_external_ancestor.execute(
            uow,
            add_external_ancestor.AddExternalAncestorInput(
                child_id=uuid4(), role=ParentRole.DAM, name="Nobody"
            ),
        )


@pytest.mark.asyncio
async def test_resolve_ancestors_fills_unknown_leaves(repo, uow):
    dam = await repo.add(make_animal("Awa", "LD-003"))
    lamb = await repo.add(make_animal("Lamb", "LD-010", dam_id=dam.id))

    tree = await resolve_ancestors.execute(uow, lamb.id, 2)
    root = tree.root
    assert root.known and root.animal_id == lamb.id
    assert root.sire.known is False
    assert root.sire.unknown_reason == UnknownReason.UNSET
    assert root.dam.animal_id == dam.id
    assert root.dam.sire.unknown_reason == UnknownReason.UNSET
    assert root.dam.dam.unknown_reason == UnknownReason.UNSET
    # depth 2 stops at grandparents
    assert root.dam.dam.sire is None
    assert sorted(tree.by_generation()) == [0, 1, 2]


@pytest.mark.asyncio
async def test_resolve_ancestors_marks_dangling_and_external(repo, uow):
    ext = await repo.add(
        make_animal("Old Star", "EXT-1", Gender.MALE, status=AnimalStatus.EXTERNAL)
    )
    missing = uuid4()
    lamb = await repo.add(make_animal("Lamb", "LD-010", sire_id=ext.id, dam_id=missing))

    tree = await resolve_ancestors.execute(uow, lamb.id, 1)
    assert tree.root.sire.is_external is True
    assert tree.root.dam.known is False
    assert tree.root.dam.unknown_reason == UnknownReason.MISSING
    assert tree.dangling_references() == [missing]


@pytest.mark.asyncio
async def test_resolve_ancestors_depth_zero_is_root_only(repo, uow):
    lamb = await repo.add(make_animal("Lamb", "LD-010"))
    tree = await resolve_ancestors.execute(uow, lamb.id, 0)
    assert tree.root.sire is None and tree.root.dam is None


@pytest.mark.asyncio
async def test_resolve_ancestors_rejects_depth_out_of_range(repo, uow):
    lamb = await repo.add(make_animal("Lamb", "LD-010"))
    with pytest.raises(ValidationError):
        await resolve_ancestors.execute(uow, lamb.id, 7, max_depth=6)
    with pytest.raises(ValidationError):
        await resolve_ancestors.execute(uow, lamb.id, -1)


@pytest.mark.asyncio
async def test_resolver_stops_on_stored_cycle(repo):
    # cycles cannot be created through link_parent, but stored data may hold one
    a = make_animal("A", "LD-A", Gender.MALE)
    b = make_animal("B", "LD-B", Gender.MALE, sire_id=a.id)
    a.sire_id = b.id
    await repo.add(a)
    await repo.add(b)

    tree = await PedigreeResolver(repo).resolve_ancestors(a, 4)
    assert tree.root.sire.animal_id == b.id
    assert tree.root.sire.sire.known is False
    assert tree.root.sire.sire.unknown_reason == UnknownReason.CYCLE


@pytest.mark.asyncio
async def test_ancestor_ids_walks_both_lines(repo):
    gs = await repo.add(make_animal("GS", "LD-1", Gender.MALE))
    gd = await repo.add(make_animal("GD", "LD-2"))
    dam = await repo.add(make_animal("Dam", "LD-3", sire_id=gs.id, dam_id=gd.id))
    sire = await repo.add(make_animal("Sire", "LD-4", Gender.MALE))
    lamb = await repo.add(make_animal("Lamb", "LD-5", sire_id=sire.id, dam_id=dam.id))

    resolver = PedigreeResolver(repo)
    assert await resolver.ancestor_ids(lamb, 3) == {gs.id, gd.id, dam.id, sire.id}
    assert await resolver.ancestor_ids(lamb, 1) == {dam.id, sire.id}
