from crego.recipe.schema import (
    DATABASE_DRIVER_MONGODB,
    DATABASE_DRIVER_MYSQL,
    DATABASE_DRIVER_NONE,
    DATABASE_DRIVER_POSTGRES,
    DATABASE_DRIVER_REDIS,
    DATABASE_DRIVER_SQLITE,
    DatabaseConfig,
    ProjectConfig,
    Recipe,
    database_drivers,
    first_database_driver,
    is_nosql_database_driver,
    is_sql_database_driver,
    nosql_database_drivers,
    primary_database_driver,
    primary_sql_database_driver,
    sql_database_drivers,
)


def test_database_drivers_prefers_explicit_list_and_dedupes():
    db = DatabaseConfig(
        drivers=[DATABASE_DRIVER_POSTGRES, "", DATABASE_DRIVER_REDIS, DATABASE_DRIVER_POSTGRES],
        driver=DATABASE_DRIVER_MYSQL,
    )
    assert database_drivers(db) == [DATABASE_DRIVER_POSTGRES, DATABASE_DRIVER_REDIS]


def test_database_drivers_from_sql_and_nosql():
    db = DatabaseConfig(sql=DATABASE_DRIVER_POSTGRES, nosql=[DATABASE_DRIVER_REDIS, DATABASE_DRIVER_MONGODB])
    assert database_drivers(db) == [DATABASE_DRIVER_POSTGRES, DATABASE_DRIVER_REDIS, DATABASE_DRIVER_MONGODB]


def test_database_drivers_skips_sql_none():
    db = DatabaseConfig(sql=DATABASE_DRIVER_NONE, nosql=[DATABASE_DRIVER_REDIS])
    assert database_drivers(db) == [DATABASE_DRIVER_REDIS]


def test_database_drivers_from_single_driver():
    assert database_drivers(DatabaseConfig(driver=DATABASE_DRIVER_SQLITE)) == [DATABASE_DRIVER_SQLITE]


def test_database_drivers_empty_is_none():
    assert database_drivers(DatabaseConfig()) == [DATABASE_DRIVER_NONE]
    assert database_drivers(DatabaseConfig(drivers=["", ""])) == [DATABASE_DRIVER_NONE]


def test_driver_classification():
    assert is_sql_database_driver(DATABASE_DRIVER_MYSQL)
    assert not is_sql_database_driver(DATABASE_DRIVER_REDIS)
    assert is_nosql_database_driver(DATABASE_DRIVER_MONGODB)
    assert not is_nosql_database_driver(DATABASE_DRIVER_NONE)


def test_sql_and_nosql_filters_keep_order():
    drivers = [DATABASE_DRIVER_REDIS, DATABASE_DRIVER_SQLITE, DATABASE_DRIVER_MONGODB, DATABASE_DRIVER_POSTGRES]
    assert sql_database_drivers(drivers) == [DATABASE_DRIVER_SQLITE, DATABASE_DRIVER_POSTGRES]
    assert nosql_database_drivers(drivers) == [DATABASE_DRIVER_REDIS, DATABASE_DRIVER_MONGODB]


def test_primary_drivers():
    assert primary_database_driver([DATABASE_DRIVER_REDIS, DATABASE_DRIVER_POSTGRES]) == DATABASE_DRIVER_POSTGRES
    assert primary_database_driver([DATABASE_DRIVER_REDIS]) == DATABASE_DRIVER_REDIS
    assert primary_database_driver([]) == DATABASE_DRIVER_NONE
    assert primary_sql_database_driver([DATABASE_DRIVER_REDIS]) == DATABASE_DRIVER_NONE
    assert primary_sql_database_driver([DATABASE_DRIVER_MONGODB, DATABASE_DRIVER_MYSQL]) == DATABASE_DRIVER_MYSQL


def test_first_database_driver():
    assert first_database_driver([""]) == DATABASE_DRIVER_NONE
    assert first_database_driver([]) == DATABASE_DRIVER_NONE
    assert first_database_driver([DATABASE_DRIVER_MONGODB, DATABASE_DRIVER_REDIS]) == DATABASE_DRIVER_MONGODB


def test_copy_is_independent():
    original = Recipe(project=ProjectConfig(name="example"), nosql_database=[DATABASE_DRIVER_REDIS])
    copied = original.copy()
    assert copied == original
    copied.project.name = "other"
    copied.nosql_database.append(DATABASE_DRIVER_MONGODB)
    copied.database.drivers.append(DATABASE_DRIVER_POSTGRES)
    assert original.project.name == "example"
    assert original.nosql_database == [DATABASE_DRIVER_REDIS]
    assert original.database.drivers == []