import pytest
from meshwire.plugins.loader import import_fn, is_path_identifier


def test_is_path_identifier(tmp_path):
    assert is_path_identifier(str(tmp_path / "resolvers"))
    assert is_path_identifier("resolvers.py")
    assert not is_path_identifier("meshwire.plugins")


@pytest.mark.asyncio
async def test_imports_dotted_module():
    module = await import_fn("meshwire.plugins.cache")
    assert hasattr(module, "InMemoryLRUCache")


@pytest.mark.asyncio
async def test_missing_dotted_module_names_itself():
    with pytest.raises(ModuleNotFoundError) as exc_info:
        await import_fn("meshwire_definitely_missing")
    assert exc_info.value.name == "meshwire_definitely_missing"


@pytest.mark.asyncio
async def test_imports_file_with_and_without_suffix(tmp_path):
    (tmp_path / "extra_resolvers.py").write_text("resolvers = {'Query': {}}\n")

    with_suffix = await import_fn(str(tmp_path / "extra_resolvers.py"))
    without_suffix = await import_fn(str(tmp_path / "extra_resolvers"))

    assert with_suffix.resolvers == {"Query": {}}
    assert without_suffix.resolvers == {"Query": {}}


@pytest.mark.asyncio
async def test_imports_package_directory(tmp_path):
    package = tmp_path / "my_cache"
    package.mkdir()
    (package / "__init__.py").write_text("default = 'cache'\n")

    module = await import_fn(str(package))
    assert module.default == "cache"


@pytest.mark.asyncio
async def test_missing_file_raises_module_not_found(tmp_path):
    missing = str(tmp_path / "nothing_here")
    with pytest.raises(ModuleNotFoundError) as exc_info:
        await import_fn(missing)
    assert exc_info.value.name == missing


@pytest.mark.asyncio
async def test_errors_inside_file_propagate(tmp_path):
    (tmp_path / "broken.py").write_text("raise RuntimeError('boom')\n")
    with pytest.raises(RuntimeError):
        await import_fn(str(tmp_path / "broken.py"))
