"""
Saved Posts Schema Definition

This module owns the versioned schema of the saved posts store. The gateway
only needs three operations (insert, list, delete) against one table; the
statements for those operations live here next to the DDL so that a change
to the table is a change to this file and a bump of SCHEMA_VERSION.
"""

SCHEMA_VERSION = 1

SAVED_POSTS_TABLE = "[dbo].[tbl_Saved_Posts]"
SCHEMA_VERSION_TABLE = "[dbo].[tbl_Saved_Posts_Schema]"

# Column names as they come back from the store
COLUMN_ID = "Saved_Post_ID"
COLUMN_CONTENT = "Content"
COLUMN_CREATED_AT = "Created_At"

COLUMNS = (COLUMN_ID, COLUMN_CONTENT, COLUMN_CREATED_AT)

CREATE_SAVED_POSTS_TABLE = f"""
IF OBJECT_ID(N'dbo.tbl_Saved_Posts', N'U') IS NULL
BEGIN
    CREATE TABLE {SAVED_POSTS_TABLE} (
        [{COLUMN_ID}] INT IDENTITY(1,1) NOT NULL PRIMARY KEY,
        [{COLUMN_CONTENT}] NVARCHAR(MAX) NOT NULL,
        [{COLUMN_CREATED_AT}] DATETIME2 NOT NULL DEFAULT SYSUTCDATETIME(),
        CONSTRAINT [CK_Saved_Posts_Content] CHECK (LEN([{COLUMN_CONTENT}]) > 0)
    );
    CREATE INDEX [IX_Saved_Posts_Created_At] ON {SAVED_POSTS_TABLE} ([{COLUMN_CREATED_AT}] DESC);
END
"""

CREATE_SCHEMA_VERSION_TABLE = f"""
IF OBJECT_ID(N'dbo.tbl_Saved_Posts_Schema', N'U') IS NULL
BEGIN
    CREATE TABLE {SCHEMA_VERSION_TABLE} (
        [Version] INT NOT NULL,
        [Applied_At] DATETIME2 NOT NULL DEFAULT SYSUTCDATETIME()
    );
END
"""

SELECT_SCHEMA_VERSION = f"SELECT MAX([Version]) AS [Version] FROM {SCHEMA_VERSION_TABLE}"

INSERT_SCHEMA_VERSION = f"INSERT INTO {SCHEMA_VERSION_TABLE} ([Version]) VALUES (?)"

INSERT_SAVED_POST = f"""
INSERT INTO {SAVED_POSTS_TABLE} ([{COLUMN_CONTENT}])
OUTPUT INSERTED.[{COLUMN_ID}], INSERTED.[{COLUMN_CONTENT}], INSERTED.[{COLUMN_CREATED_AT}]
VALUES (?)
"""

SELECT_SAVED_POSTS = f"""
SELECT [{COLUMN_ID}], [{COLUMN_CONTENT}], [{COLUMN_CREATED_AT}]
FROM {SAVED_POSTS_TABLE}
ORDER BY [{COLUMN_CREATED_AT}] DESC, [{COLUMN_ID}] DESC
"""

DELETE_SAVED_POST = f"DELETE FROM {SAVED_POSTS_TABLE} WHERE [{COLUMN_ID}] = ?"

# Cheapest query that proves the table is reachable
CONNECTION_TEST_QUERY = f"SELECT TOP 1 [{COLUMN_ID}] FROM {SAVED_POSTS_TABLE}"
