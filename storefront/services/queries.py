# storefront/services/queries.py
#dokumenty GraphQL dla Storefront API, fragmenty skladane f-stringami

IMAGE_FIELDS = """
  id
  url
  altText
  width
  height
"""

PRODUCT_FIELDS = f"""
  id
  title
  description
  descriptionHtml
  handle
  availableForSale
  productType
  vendor
  tags
  priceRange {{
    minVariantPrice {{
      amount
      currencyCode
    }}
  }}
  variants(first: 100) {{
    edges {{
      node {{
        id
        title
        price {{
          amount
          currencyCode
        }}
        availableForSale
        selectedOptions {{
          name
          value
        }}
        image {{{IMAGE_FIELDS}}}
        sku
        quantityAvailable
      }}
    }}
  }}
"""

CART_FIELDS = f"""
  id
  checkoutUrl
  totalQuantity
  cost {{
    totalAmount {{
      amount
      currencyCode
    }}
    subtotalAmount {{
      amount
      currencyCode
    }}
  }}
  lines(first: 100) {{
    edges {{
      node {{
        id
        quantity
        merchandise {{
          ... on ProductVariant {{
            id
            title
            price {{
              amount
              currencyCode
            }}
            product {{
              id
              title
              handle
              images(first: 1) {{
                edges {{
                  node {{{IMAGE_FIELDS}}}
                }}
              }}
            }}
            selectedOptions {{
              name
              value
            }}
          }}
        }}
        cost {{
          totalAmount {{
            amount
            currencyCode
          }}
        }}
      }}
    }}
  }}
"""

PRODUCTS_QUERY = f"""
query getProducts($first: Int!, $after: String, $query: String) {{
  products(first: $first, after: $after, query: $query) {{
    edges {{
      node {{
        {PRODUCT_FIELDS}
        images(first: 5) {{
          edges {{
            node {{{IMAGE_FIELDS}}}
          }}
        }}
      }}
      cursor
    }}
    pageInfo {{
      hasNextPage
      endCursor
    }}
  }}
}}
"""

PRODUCT_QUERY = f"""
query getProduct($handle: String!) {{
  product(handle: $handle) {{
    {PRODUCT_FIELDS}
    images(first: 10) {{
      edges {{
        node {{{IMAGE_FIELDS}}}
      }}
    }}
  }}
}}
"""

COLLECTIONS_QUERY = f"""
query getCollections($first: Int!) {{
  collections(first: $first) {{
    edges {{
      node {{
        id
        title
        handle
        description
        image {{{IMAGE_FIELDS}}}
      }}
    }}
  }}
}}
"""

CART_QUERY = f"""
query getCart($id: ID!) {{
  cart(id: $id) {{
    {CART_FIELDS}
  }}
}}
"""

CART_CREATE_MUTATION = f"""
mutation cartCreate($input: CartInput!) {{
  cartCreate(input: $input) {{
    cart {{
      {CART_FIELDS}
    }}
    userErrors {{
      field
      message
    }}
  }}
}}
"""

CART_LINES_ADD_MUTATION = f"""
mutation cartLinesAdd($cartId: ID!, $lines: [CartLineInput!]!) {{
  cartLinesAdd(cartId: $cartId, lines: $lines) {{
    cart {{
      {CART_FIELDS}
    }}
    userErrors {{
      field
      message
    }}
  }}
}}
"""

CART_LINES_UPDATE_MUTATION = f"""
mutation cartLinesUpdate($cartId: ID!, $lines: [CartLineUpdateInput!]!) {{
  cartLinesUpdate(cartId: $cartId, lines: $lines) {{
    cart {{
      {CART_FIELDS}
    }}
    userErrors {{
      field
      message
    }}
  }}
}}
"""
