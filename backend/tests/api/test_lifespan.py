"""Application Lifespan — shutdown marks every account offline and releases the engine."""

from union.main import create_app, lifespan


async def test_shutdown_resets_presence(registries, settings, alice, bob):
    await registries.accounts.set_presence(alice.id, True)
    await registries.accounts.set_presence(bob.id, True)
    app = create_app(registries=registries, settings=settings)

    async with lifespan(app):
        assert app.state.registries is registries

    assert (await registries.accounts.get(alice.id)).online is False
    assert (await registries.accounts.get(bob.id)).online is False
    # Injected registries stay with the caller
    assert app.state.registries is registries


async def test_shutdown_keeps_presence_when_disabled(registries, settings, alice):
    settings = settings.model_copy(update={"reset_presence_on_shutdown": False})
    await registries.accounts.set_presence(alice.id, True)
    app = create_app(registries=registries, settings=settings)

    async with lifespan(app):
        pass

    assert (await registries.accounts.get(alice.id)).online is True


async def test_failed_presence_reset_still_disposes_owned_engine(settings, monkeypatch):
    # No tables exist on the lifespan-built engine, so the reset fails
    app = create_app(settings=settings)
    disposed = []

    async with lifespan(app):
        db = app.state.registries.db
        real_dispose = db.dispose

        async def spy_dispose():
            disposed.append(True)
            await real_dispose()

        monkeypatch.setattr(db, "dispose", spy_dispose)

    assert disposed == [True]
    assert app.state.registries is None
