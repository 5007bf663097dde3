from socialfeed.crud import post as post_crud


async def test_add_like_is_idempotent_per_user(db, seed, user):
    post = await seed.post("howdy!")

    assert await post_crud.add_like(db, post.id, user.id) is True
    assert await post_crud.add_like(db, post.id, user.id) is False
    await db.commit()

    stored = await seed.load_post(post.id)
    assert stored.like_count == 1
    assert stored.liked_by == {user.id}


async def test_remove_like_without_membership_leaves_count(db, seed, user):
    post = await seed.post("howdy!", like_count=3)

    assert await post_crud.remove_like(db, post.id, user.id) is False
    await db.commit()

    assert (await seed.load_post(post.id)).like_count == 3


async def test_remove_like_never_goes_below_zero(db, seed, user):
    post = await seed.post("howdy!", liked_by=[user.id], like_count=0)

    assert await post_crud.remove_like(db, post.id, user.id) is True
    await db.commit()

    stored = await seed.load_post(post.id)
    assert stored.like_count == 0
    assert stored.liked_by == set()


async def test_posts_referencing_user(db, seed, user):
    other = await seed.user(email="other@test.com")
    authored = await seed.post("authored", author_id=user.id)
    commented = await seed.post("commented", comments=[("hi", {"id": str(user.id)})])
    await seed.post("someone else's", author_id=other.id, comments=[("hi", {"id": str(user.id)})])
    await seed.post("unrelated", author_id=other.id, liked_by=[user.id])

    found = await post_crud.get_posts_referencing_user(db, user.id)

    assert {post.id for post in found} == {authored.id, commented.id}


async def test_get_posts_newest_first(db, seed):
    first = await seed.post("first")
    second = await seed.post("second")

    posts = await post_crud.get_posts(db)

    assert [post.id for post in posts] == [second.id, first.id]
