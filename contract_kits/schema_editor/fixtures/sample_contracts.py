"""Contract strings shared by the schema editor tests."""

SAMPLE_CONTRACT = """{
  "Contract": {
    "type": "object",
    "properties": {
      "Id": {"$ref":"#/Guid"},
      "Timestamp": {
        "type": "string",
        "format": "date-time",
        "example": "2019-01-01T18:14:29Z"
      },
      "Address": {
        "type": "object",
        "properties": {
          "FullName": {
            "type": "object",
            "properties": {
              "FirstName": {
                "type": "string",
                "example": "John"
              },
              "LastName": {
                "type": "string",
                "example": "Doe"
              }
            }
          },
          "Street": {
            "name":"Street",
            "type":"string",
            "example":"123 Main St."
          }
        }
      }
    }
  },
  "Guid": {
    "type": "string",
    "pattern": "^(([0-9a-f]){8}-([0-9a-f]){4}-([0-9a-f]){4}-([0-9a-f]){4}-([0-9a-f]){12})$",
    "minLength": 36,
    "maxLength": 36,
    "example": "01234567-abcd-0123-abcd-0123456789ab"
  }
}"""

NAME_AGE_CONTRACT = """{
  "Contract": {
    "type": "object",
    "properties": {
      "Name": {"type": "string", "pattern": ".*"},
      "Age": {"type": "integer"}
    }
  }
}"""

ARRAY_CONTRACT = """{
  "Contract": {
    "type": "object",
    "properties": {
      "Tags": {"type": "array", "items": {"type": "string"}},
      "Ids": {"type": "array", "items": {"$ref": "#/Guid"}},
      "Stamps": {"type": "array", "items": {"type": "string", "format": "date-time"}},
      "Lines": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "Sku": {"type": "string", "pattern": "^[A-Z]{3}$"},
            "Quantity": {"type": "integer"}
          }
        }
      }
    }
  },
  "Guid": {"type": "string", "pattern": ".*"}
}"""


DANGLING_REF_CONTRACT = """{
  "Contract": {
    "type": "object",
    "properties": {
      "Owner": {"$ref": "#/Person"},
      "Backups": {"type": "array", "items": {"$ref": "#/Person"}}
    }
  }
}"""

REFERENCE_CHAIN_CONTRACT = """{
  "Contract": {
    "type": "object",
    "properties": {
      "Id": {"$ref": "#/Key"}
    }
  },
  "Key": {"$ref": "#/Guid"},
  "Guid": {"type": "string", "format": "uuid", "minLength": 36}
}"""

OBJECT_REF_CONTRACT = """{
  "Contract": {
    "type": "object",
    "properties": {
      "Owner": {"$ref": "#/Person"},
      "Friends": {"type": "array", "items": {"$ref": "#/Person"}}
    }
  },
  "Person": {
    "type": "object",
    "properties": {"Name": {"type": "string"}}
  }
}"""

NESTED_ARRAY_CONTRACT = """{
  "Contract": {
    "type": "object",
    "properties": {
      "Grid": {
        "type": "array",
        "description": "rows of cells",
        "items": {
          "type": "array",
          "items": {
            "type": "object",
            "properties": {
              "X": {"type": "integer", "minimum": 0},
              "Label": {"type": "string", "example": "a1"}
            }
          }
        }
      },
      "Matrix": {"type": "array", "items": {"type": "array", "items": {"type": "number"}}}
    }
  }
}"""

NULLABLE_CONTRACT = """{
  "Contract": {
    "type": "object",
    "properties": {
      "Nickname": {"type": ["string", "null"], "example": "Jo"},
      "Age": {"type": "integer"}
    }
  }
}"""

def sample_rows():
    """Row tree the editor holds for SAMPLE_CONTRACT, with rowIds assigned."""
    return [
        {'name': 'Id', 'rowId': 1, '$ref': '#/Guid'},
        {'name': 'Timestamp', 'rowId': 2, 'type': 'string', 'format': 'date-time'},
        {
            'name': 'Address',
            'rowId': 3,
            'type': 'object',
            'properties': [
                {
                    'name': 'FullName',
                    'rowId': 4,
                    'type': 'object',
                    'properties': [
                        {'name': 'FirstName', 'rowId': 6, 'type': 'string'},
                        {'name': 'LastName', 'rowId': 7, 'type': 'string'},
                    ],
                },
                {'name': 'Street', 'rowId': 5, 'type': 'string'},
            ],
        },
    ]


def numbered_tree():
    """Two-root tree used by the navigation tests."""
    return [
        {
            'rowId': 1,
            'name': 'row1',
            'properties': [
                {'rowId': 2, 'name': 'row2', 'properties': [{'rowId': 4, 'name': 'row4'}]},
                {'rowId': 5, 'name': 'row5', 'properties': [{'rowId': 3, 'name': 'row3'}]},
            ],
        },
        {
            'rowId': 6,
            'name': 'row6',
            'properties': [
                {'rowId': 7, 'name': 'row7', 'properties': [{'rowId': 8, 'name': 'row8'}]},
                {
                    'rowId': 9,
                    'name': 'row9',
                    'properties': [{'rowId': 10, 'name': 'row10'}, {'rowId': 11, 'name': 'row11'}],
                },
            ],
        },
    ]
